from setuptools import find_packages, setup

setup(
    name="ecs-lib",
    version="0.1.0",
    description="A small entity-component-system library with world snapshots",
    packages=find_packages(
        include=[
            "ecs_common",
            "ecs_common.*",
            "ecs_core",
            "ecs_core.*",
            "ecs_persistence",
            "ecs_persistence.*",
            "ecs_admin",
            "ecs_admin.*",
        ]
    ),
    install_requires=[
        "aiosqlite>=0.19.0",
        "click>=8.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-xdist>=3.3.0",
            "build>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ecs-admin=ecs_admin.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
