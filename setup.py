import setuptools

import symbolizer

setuptools.setup(
    name="symbolizer",
    version=symbolizer.__version__,
    description="Fast execution trace symbolizer",
    packages=[
        "symbolizer",
    ],
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
    install_requires=[
        "click",
        "minidump",
        "pyelftools",
        "sortedcontainers",
    ],
    entry_points={
        "console_scripts": [
            "symbolizer=symbolizer.cli:main",
        ],
    },
)
