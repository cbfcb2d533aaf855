from setuptools import setup, find_packages

setup(
    name="straitjacket-math",                  # package name
    version="0.1.0",
    description="Straitjacket.Math: nearest-factor rounding/flooring and linear range remapping",
    package_dir={"": "src"},                   # sources live in src/
    packages=find_packages(where="src"),       # only look for packages inside src/
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.26",
        "pandas>=2.2",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=8.2"],
        "dev": ["black", "isort", "flake8", "mypy", "pytest-cov"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    zip_safe=False,
)
