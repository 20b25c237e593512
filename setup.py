import os

from setuptools import setup, find_packages

_here = os.path.dirname(os.path.abspath(__file__))
_version = {}
with open(os.path.join(_here, "src", "logcarp", "_version.py"), encoding="utf-8") as f:
    exec(f.read(), _version)

setup(
    name="logcarp",
    version=_version["PIP_VERSION"],
    description="Error, log and debug channels with httpd-style stamps, per-sink dedup and flock()ed appends",
    author="Michael King",
    url="https://github.com/logcarp/logcarp",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "logcarp=logcarp.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Artistic License",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Logging",
    ],
    python_requires=">=3.10",
)
