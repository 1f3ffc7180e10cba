from collections.abc import Mapping
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union


class DatasetCollection(object):
    """Ordered per-dataset values of one attribute of a merged CommunicationObject.

    Values keep their input order and may be looked up by position or, when the datasets were named, by name. Names
    are not required to be unique; a name lookup returns the first dataset carrying that name.

    Args:
        values: One value per dataset.
        names: Optional dataset names, same length as `values`.
    """

    def __init__(self, values: Sequence[Any], names: Optional[Sequence[str]] = None):
        self._values = list(values)
        self._names = None if names is None else [str(name) for name in names]
        if self._names is not None and len(self._names) != len(self._values):
            raise ValueError(f"Got {len(self._names)} names for {len(self._values)} values.")

    @property
    def names(self) -> Optional[List[str]]:
        return None if self._names is None else list(self._names)

    @property
    def is_named(self) -> bool:
        return self._names is not None

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __contains__(self, name) -> bool:
        return self._names is not None and name in self._names

    def __getitem__(self, key: Union[int, str]) -> Any:
        if isinstance(key, str):
            if self._names is None or key not in self._names:
                raise KeyError(key)
            return self._values[self._names.index(key)]
        return self._values[key]

    def keys(self) -> List[Union[int, str]]:
        return self.names if self.is_named else list(range(len(self._values)))

    def values(self) -> List[Any]:
        return list(self._values)

    def items(self) -> List[Tuple[Union[int, str], Any]]:
        return list(zip(self.keys(), self._values))

    def to_dict(self) -> dict:
        """Name (or position) to value. Refuses repeated names, which a dict cannot hold."""
        if self.is_named and len(set(self._names)) != len(self._names):
            raise ValueError(f"Dataset names {self._names} are not unique.")
        return dict(self.items())

    def __eq__(self, other) -> bool:
        """Named collections equal a mapping with the same items in the same order, unnamed ones equal a sequence
        of the same values.
        """
        if isinstance(other, DatasetCollection):
            return self._names == other._names and self._values == other._values
        if self.is_named and isinstance(other, Mapping):
            return self.items() == list(other.items())
        if not self.is_named and isinstance(other, (list, tuple)):
            return self._values == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        if self.is_named:
            return f"DatasetCollection({', '.join(self._names)})"
        return f"DatasetCollection(<{len(self)} unnamed datasets>)"
