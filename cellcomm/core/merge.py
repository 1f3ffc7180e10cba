from typing import Optional, Sequence

from ..configuration import CKM
from ..errors import EmptyInputError, InvalidInputError, LengthMismatchError
from ..logging import logger_manager as lm
from .collection import DatasetCollection
from .object import CommunicationObject


def merge(
    objects: Sequence[CommunicationObject],
    names: Optional[Sequence[str]] = None,
) -> CommunicationObject:
    """Merge CommunicationObjects of several datasets for comparison.

    Only the slots `net`, `netP`, `idents` and `LR` are merged: each becomes a `DatasetCollection` holding the value
    of every input object, in input order, named by `names` when given. Every other slot of the merged object is left
    empty, so it is not a union of the inputs. The merged object is tagged through `merged_slots`.

    The values are shared with the input objects, which are not modified. Whether the cell groups of the datasets are
    comparable (same K, same levels) is not checked.

    Args:
        objects: One CommunicationObject per dataset.
        names: Name of each dataset. Duplicated names are accepted but name lookups then return the first dataset.

    Returns:
        The merged CommunicationObject.

    Raises:
        EmptyInputError: `objects` is empty.
        LengthMismatchError: `names` and `objects` differ in length.
    """
    objects = list(objects)
    if len(objects) == 0:
        raise EmptyInputError("objects: at least one CommunicationObject is required to merge.")
    for i, obj in enumerate(objects):
        if not isinstance(obj, CommunicationObject):
            raise InvalidInputError(f"objects: element {i} is a {type(obj).__name__}, not a CommunicationObject.")
    if isinstance(names, str):
        raise InvalidInputError("names: expected one name per dataset, got a single string.")
    if names is not None:
        names = [str(name) for name in names]
        if len(names) != len(objects):
            raise LengthMismatchError(f"names: got {len(names)} names for {len(objects)} objects.")
        if len(set(names)) != len(names):
            lm.main_warning(f"Dataset names {names} are not unique, lookups by name return the first match.")

    slot_combined = {}
    for slot in CKM.MERGED_SLOTS:
        slot_combined[slot] = DatasetCollection([getattr(obj, slot) for obj in objects], names=names)

    merged_object = CommunicationObject(**slot_combined)
    merged_object.merged_slots = CKM.MERGED_SLOTS
    merged_object.dataset_names = names
    lm.main_info(CKM.merged_slot_message())
    return merged_object
