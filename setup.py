"""
Packaging for sniwatch.
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

setup(
    name="sniwatch",
    version="0.1.0",
    author="sniwatch developers",
    description="StatusNotifierWatcher: D-Bus registry broker for tray items and hosts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["sniwatch", "sniwatch.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: X11 Applications",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Desktop Environment",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=6.0",
    ],
    extras_require={
        # Bus bindings need system libdbus / gobject-introspection headers.
        "dbus": [
            "dbus-python>=1.3.2",
            "PyGObject>=3.42.0",
        ],
        "dev": [
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sniwatch=sniwatch.main:main",
        ],
    },
)
