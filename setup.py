"""
Generate OpenAPI documentation with standard responses from a Python class definition

Copyright 2022-2025, Levente Hunyadi
"""

from setuptools import setup

if __name__ == "__main__":
    setup()
