# type: ignore
import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="stackpool",
    version="0.1.0",
    license="MIT",
    keywords=["object pool", "memory", "allocation"],

    description="A fixed capacity object pool with scoped borrow handles",
    long_description=long_description,
    long_description_content_type="text/markdown",

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    package_data={
        'stackpool': ['py.typed'],
    },
    packages=['stackpool'],
    python_requires=">=3.7",
    setup_requires=['wheel'],
    install_requires=[
        'typing_extensions>=3.7.4',
    ],
)
