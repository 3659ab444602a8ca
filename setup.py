# -*- coding: utf-8 -*-
# Licensed under the 2-clause BSD License

from setuptools import setup, find_packages

package_name = "remote_uploads"

packages = find_packages(exclude=["tests", "tests.*"])

install_reqs = [
    "loguru",
    "paramiko>=3.0",
    "pydantic>=2.0",
    "pydantic-settings>=2.0",
    "requests",
]

test_reqs = [
    "pytest",
]

setup(
    name=package_name,
    version="1.0.0",
    license="BSD",
    description="FTP and SFTP storage engines for file uploads",
    long_description="""\
Storage engines that send uploaded files to a remote FTP or SFTP server,
and fetch, stat and delete them later. Incoming files are staged in a local
cache directory that prunes itself when the disk runs out of space or links.
""",
    python_requires=">=3.10",
    install_requires=install_reqs,
    tests_require=test_reqs,
    packages=packages,
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "License :: OSI Approved :: BSD License",
        "Topic :: Internet :: File Transfer Protocol (FTP)",
    ],
    extras_require={
        "test": test_reqs,
    },
    include_package_data=True,
    zip_safe=False,
)
