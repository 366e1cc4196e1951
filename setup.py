from setuptools import setup, find_packages

setup(
    name="pairs_core",
    version="0.1.0",
    packages=find_packages(include=["pairs", "pairs.*", "config", "desktop_ui", "desktop_ui.*"]),
    py_modules=["main"],
    install_requires=[
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "desktop": ["PySide6>=6.5"],
        "test": ["pytest>=7.4", "PySide6>=6.5"],
    },
    python_requires=">=3.10",
)
