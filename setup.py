import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="reactive_property_gen",
    version="1.0.0",
    description="Generate change-notifying C# properties for fields tagged with [ReactiveProperty]",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Text Processing",
        "Intended Audience :: Developers",
    ],
    keywords="csharp code generation reactive property inotifypropertychanged template",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        "tree-sitter>=0.23.0",
        "tree-sitter-c-sharp>=0.23.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "reactive_property_gen=reactive_property_gen.reactive_property_gen:reactive_property_gen",
        ],
    },
    include_package_data=True,
    package_data={
        "reactive_property_gen": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
