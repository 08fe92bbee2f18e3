"""
Setup configuration for the project.
Allows the package to be installed in development mode.
"""

from setuptools import setup, find_packages

setup(
    name="verifactu-invoice-sender",
    version="1.0.0",
    description="Submit invoices to the Spanish Verifactu API for tax compliance",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    install_requires=[
        "requests>=2.31.0",
        "qrcode[pil]>=7.4",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "verifactu-enviar=main:main",
        ],
    },
    python_requires=">=3.8",
)
