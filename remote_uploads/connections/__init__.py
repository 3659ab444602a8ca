"""
Connection managers: open one authenticated session per operation.
"""

from .core import CoreConnectionManager
from .ftp import FTPConnectionManager
from .sftp import SFTPConnectionManager
