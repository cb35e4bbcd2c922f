"""
YorAuth Python SDK - Package Setup

Setup configuration for PyPI distribution.
"""

from setuptools import setup, find_packages
import os

# Read the README for long description
readme_path = os.path.join(os.path.dirname(__file__), "README.md")
long_description = ""
if os.path.exists(readme_path):
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="yorauth",
    version="1.0.0",
    author="YorAuth Team",
    author_email="dev@yorauth.com",
    description="Python SDK for the YorAuth authentication and authorization platform",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yorauth/yorauth-python",
    project_urls={
        "Documentation": "https://docs.yorauth.com/sdk/python",
        "Bug Tracker": "https://github.com/yorauth/yorauth-python/issues",
        "Source Code": "https://github.com/yorauth/yorauth-python",
    },
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    python_requires=">=3.8",
    install_requires=[
        "httpx>=0.24.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pytest-asyncio>=0.21.0",
            "hypothesis>=6.0.0",
            "respx>=0.20.0",
            "mypy>=1.0.0",
            "black>=23.0.0",
            "isort>=5.0.0",
            "flake8>=6.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Security",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Typing :: Typed",
        "Framework :: AsyncIO",
    ],
    keywords="authentication, authorization, yorauth, sdk, api, jwt, oidc, rbac",
    package_data={
        "yorauth": ["py.typed"],
    },
    include_package_data=True,
    zip_safe=False,
)
