"""
tmptation - temporary files and folders that can be deleted in bulk, safely
"""

from __future__ import annotations

__version__ = '1.4'

from tmptation.safe_deleting import (UnsafeDeletion, SafeDeleter, default_deleter,
                                     effective_path, is_safe, guarded_delete,
                                     guarded_delete_contents)
from tmptation.instance_tracking import InstanceRegistry, default_registry
from tmptation.tmp_file import TmpFile
from tmptation.tmp_dir import TmpDir
