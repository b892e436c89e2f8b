from setuptools import (
    find_packages,
    setup,
)

setup(
    name="autowrapper",
    version="0.1.0",
    description="Generate glib_wrapper! declarations from resolved GObject type descriptors",
    packages=find_packages(include=["autowrapper", "autowrapper.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "autowrapper=autowrapper:cli",
        ],
    },
)
