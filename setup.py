import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="fpgadense-model",
    version="0.1.0",
    author="Alex Montgomerie",
    author_email="am9215@ic.ac.uk",
    description="Bit-exact functional model of a fixed-point dense layer for FPGA and embedded devices.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    include_package_data=True,
    packages=setuptools.find_packages(
        include=['fpgadense', 'fpgadense.*']),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.10',
    install_requires=[
        "networkx>=2.5",
        "numpy>=1.19.2",
        "pyyaml>=5.1.0",
        "toml>=0.10.2",
        "pydot>=1.4.2",
        "dacite>=1.8.0",
        "fpbinary>=1.5.0",
    ],
    extras_require={
        "test": [
            "ddt>=1.4.2",
            "pytest",
            "coverage>=5.5",
        ],
    },
    entry_points={
        "console_scripts": [
            "fpgadense=fpgadense.cli:main",
        ],
    },
)
