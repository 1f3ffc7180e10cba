"""Data model and cross-dataset merging for cell-cell communication analysis of single-cell transcriptomics
"""

__version__ = "0.1.0"

from . import tools as tl
from .configuration import CKM, config
from .core import (
    CommunicationObject,
    DatasetCollection,
    LabeledMatrix,
    LRDatabase,
    create,
    describe,
    merge,
)
from .errors import *
