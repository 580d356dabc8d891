[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "netlab"
version = "0.1.0"
description = "Small networking exercises: distance-vector routing, leaky bucket, socket chat, file transfer and ARQ protocols"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "networking",
    "sockets",
    "routing",
    "distance-vector",
    "leaky-bucket",
    "arq",
    "go-back-n",
    "selective-repeat",
    "stop-and-wait",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netlab-routing = "netlab.routing:main"
netlab-leaky-bucket = "netlab.leaky_bucket:main"
netlab-tcp-chat = "netlab.tcp_chat:main"
netlab-udp-chat = "netlab.udp_chat:main"
netlab-ftp = "netlab.ftp:main"
netlab-stop-and-wait = "netlab.stop_and_wait:main"
netlab-go-back-n = "netlab.go_back_n:main"
netlab-selective-repeat = "netlab.selective_repeat:main"

[tool.setuptools.packages.find]
include = ["netlab*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
