import codecs
import os

from setuptools import find_packages, setup

PROJECT_ROOT = os.path.dirname(os.path.realpath(__file__))
README_FILE = os.path.join(PROJECT_ROOT, "README.md")
REQUIREMENTS_FILE = os.path.join(PROJECT_ROOT, "requirements.txt")
VERSION_FILE = os.path.join(PROJECT_ROOT, "modelinsight", "version.py")


def get_long_description():
    with codecs.open(README_FILE, "rt") as buff:
        return buff.read()


def get_requirements():
    with codecs.open(REQUIREMENTS_FILE) as buff:
        return buff.read().splitlines()


def get_version():
    with open(VERSION_FILE, encoding="utf-8") as buff:
        exec(buff.read()) # pylint: disable=exec-used
    return vars()["__version__"]


setup(
    name="modelinsight",
    version=get_version(),
    description="Uniform access to the structure of fitted regression models",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    install_requires=get_requirements(),
    extras_require={"test": ["pytest"]},
    packages=find_packages(exclude=["tests", "test_*"]),
    license="MIT",
)
