[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kubecommon"
version = "0.1.0"
description = "Helpers for Kubernetes operators: status condition lists, environment variable merging, pod anti-affinity rules, pod annotations and Ansible inventories."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["kubernetes", "operator", "conditions", "ansible", "inventory", "affinity"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kubecommon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
