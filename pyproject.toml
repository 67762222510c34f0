[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stewartmon"
version = "0.1.0"
description = "Serial monitor and visualiser for a Stewart platform: IMU readings, servo bars, G-force trace and a rolling-ball simulation"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = [
    "stewart platform",
    "imu",
    "accelerometer",
    "gyroscope",
    "serial",
    "crc8",
    "telemetry",
    "visualization",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Terminals :: Serial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
stewartmon = "stewartmon.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["stewartmon"]

[tool.pytest.ini_options]
addopts = "-ra"
