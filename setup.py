from setuptools import find_packages, setup

setup(
    name="smart-tremolo",
    version="1.0.0",
    description="LFO tremolo with smoothed parameters, stereo phase and frame-based adaptive control.",
    packages=find_packages(include=["smart_tremolo", "smart_tremolo.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
        "soundfile",
        "click",
        "rich",
        "pydantic>=2",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "smart-tremolo=smart_tremolo.cli.main:cli",
        ],
    },
)
