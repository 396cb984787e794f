from setuptools import find_packages, setup

setup(
    name="termview",
    version="0.1.0",
    description="Application-defined progress indicators that coexist with terminal output",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "tracerite",
        "rich",
        "colorama; sys_platform == 'win32'",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "termview-demo=termview.cli:main",
        ],
    },
)
