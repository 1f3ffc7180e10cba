from .collection import DatasetCollection
from .create import create
from .database import LRDatabase
from .matrix import LabeledMatrix, as_labeled_matrix
from .merge import merge
from .object import CommunicationObject, describe
