"""Setup script"""

from setuptools import setup

libname = "mpsviewer"
setup(
    name=libname,
    version="0.0.1",
    author="Martin de La Gorce",
    author_email="martin.delagorce@gmail.com",
    description="Reader and viewer for linear programs stored in the MPS format",
    packages=["mpsviewer"],
    license="MIT",
    python_requires=">=3.7",
    install_requires=["numpy", "scipy"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["mpsviewer=mpsviewer.viewer:main"]},
)
