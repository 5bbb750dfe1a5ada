import os

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "version.txt")) as f:
    version = f.read().rstrip()

with open(os.path.join(here, "requirements", "base.in")) as f:
    install_requires = f.readlines()

with open(os.path.join(here, "requirements", "test.in")) as f:
    tests_require = f.readlines()

setup(
    name="timingsclient",
    version=version,
    description="Test timings data fetcher for the CI timings dashboard",
    author="Mozilla Release Engineering",
    author_email="release+python@mozilla.com",
    url="https://github.com/mozilla-releng/scriptworker-scripts",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    entry_points={"console_scripts": ["timingsclient = timingsclient.script:main"]},
    python_requires=">=3.11",
    license="MPL2",
    install_requires=install_requires,
    extras_require={"test": tests_require},
)
