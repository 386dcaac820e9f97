from __future__ import annotations

from setuptools import setup


def load_dependencies() -> list[str]:
    """Assemble install_requires for the registry package."""
    return [
        # Snapshot validation
        "pydantic>=2.5",
    ]


setup(install_requires=load_dependencies())
