"""
Setup script for RT Detect real-time object detection backends
"""

from setuptools import setup, find_packages

setup(
    name="rt-detect",
    version="1.0.0",
    description="Real-time object detection backends with tensor decoding and NMS",
    author="RT Detect Team",
    packages=find_packages(include=["rtdetect", "rtdetect.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19.0",
        "numba>=0.53.0",
        "opencv-python>=4.5.4",
        "pyyaml>=5.4",
    ],
    extras_require={
        "test": [
            "pytest>=6.0",
        ],
    },
)
