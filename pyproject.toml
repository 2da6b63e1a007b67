[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "samlkit"
version = "0.1.0"
description = "Helpers for the service-provider side of SAML: timestamps, bindings, certificates and XML lookup"
requires-python = ">=3.10"
keywords = ["saml", "sso", "service-provider", "http-redirect", "http-post", "x509"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "lxml",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["samlkit"]

[tool.pytest.ini_options]
addopts = "-ra"
