from setuptools import setup, find_namespace_packages
from version import __version__

setup(
    name="gtfs4sim",
    version=__version__,
    description="A tool to convert GTFS data into the transit schedule, pseudo network and vehicles of an agent-based transport simulation",
    long_description="README.md",
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    packages=find_namespace_packages(include=["gtfs4sim", "gtfs4sim.*"], exclude=["gtfs4sim.tests", "gtfs4sim.tests.*"]),
    py_modules=["version"],
    install_requires=[
        "pandas==2.2.3",
        "numpy==2.2.4",
        "pyproj==3.7.1",
    ],
    extras_require={
        "test": ["pytest==8.3.5"],
    },
    entry_points={
        'console_scripts': [
            'gtfs4sim=gtfs4sim.gtfs4sim_cli:main',
        ],
    }
)
