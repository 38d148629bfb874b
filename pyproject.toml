[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "animkit"
version = "0.1.0"
description = "Skeletal animation toolkit: vectors, matrices, quaternions, skeletons, motions and BVH files"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["animation", "bvh", "skeleton", "quaternion", "motion capture", "kinematics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["animkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
