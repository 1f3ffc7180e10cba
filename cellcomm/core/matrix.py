"""Labelled genes x cells matrices that may be stored densely or in compressed sparse column form.
"""
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd
from anndata import AnnData
from scipy import sparse

from ..errors import InvalidInputError, StorageConversionError
from ..logging import logger_manager as lm

MatrixLike = Union[np.ndarray, sparse.spmatrix]


def _is_supported_dtype(dtype) -> bool:
    return np.issubdtype(dtype, np.number) or np.issubdtype(dtype, np.bool_)


def _as_labels(labels, n: int, axis: str, attr: str) -> pd.Index:
    if labels is None:
        raise InvalidInputError(f"{attr}: matrix has no {axis} labels.")
    labels = pd.Index(labels)
    if len(labels) != n:
        raise InvalidInputError(f"{attr}: got {len(labels)} {axis} labels for {n} {axis}s.")
    if not labels.is_unique:
        duplicated = labels[labels.duplicated()].unique().tolist()
        raise InvalidInputError(f"{attr}: {axis} labels are not unique, e.g. {duplicated[:5]}.")
    return labels


class LabeledMatrix(object):
    """A two dimensional matrix with row (gene) and column (cell) labels.

    Both dense `np.ndarray` and `scipy.sparse` storage are accepted and behave the same through this class, so code
    working with expression matrices never needs to branch on the storage format.

    Args:
        X: Dense or sparse two dimensional matrix.
        row_names: Row labels, usually gene identifiers.
        col_names: Column labels, usually cell identifiers.
        attr: Name of the attribute the matrix is meant for, used in error messages.
    """

    def __init__(
        self,
        X: MatrixLike,
        row_names: Optional[Iterable] = None,
        col_names: Optional[Iterable] = None,
        attr: str = "matrix",
    ):
        if not sparse.issparse(X):
            X = np.asarray(X)
        if X.ndim != 2:
            raise InvalidInputError(f"{attr}: expected a two dimensional matrix, got {X.ndim} dimensions.")

        self.X = X
        self.row_names = _as_labels(row_names, X.shape[0], "row", attr)
        self.col_names = _as_labels(col_names, X.shape[1], "column", attr)

    @classmethod
    def empty(cls) -> "LabeledMatrix":
        return cls(np.empty((0, 0)), row_names=[], col_names=[])

    @classmethod
    def from_frame(cls, df: pd.DataFrame, attr: str = "matrix") -> "LabeledMatrix":
        """Wrap a data frame whose index holds gene identifiers and whose columns hold cell identifiers.

        A default `RangeIndex` on either axis is treated as missing labels.
        """
        if isinstance(df.index, pd.RangeIndex):
            raise InvalidInputError(f"{attr}: data frame has no row labels (default RangeIndex).")
        if isinstance(df.columns, pd.RangeIndex):
            raise InvalidInputError(f"{attr}: data frame has no column labels (default RangeIndex).")
        X = df.sparse.to_coo().tocsc() if _frame_is_sparse(df) else df.to_numpy()
        return cls(X, row_names=df.index, col_names=df.columns, attr=attr)

    @classmethod
    def from_anndata(cls, adata: AnnData, layer: Optional[str] = None, attr: str = "matrix") -> "LabeledMatrix":
        """Convert a cells x genes AnnData into a genes x cells matrix."""
        X = adata.X if layer is None else adata.layers[layer]
        if X is None:
            raise InvalidInputError(f"{attr}: AnnData has no expression matrix.")
        lm.main_debug(f"Transposing AnnData of shape {adata.shape} into a genes x cells matrix.")
        return cls(X.T, row_names=adata.var_names, col_names=adata.obs_names, attr=attr)

    @property
    def shape(self):
        return self.X.shape

    @property
    def n_rows(self) -> int:
        return self.X.shape[0]

    @property
    def n_cols(self) -> int:
        return self.X.shape[1]

    @property
    def issparse(self) -> bool:
        return sparse.issparse(self.X)

    @property
    def is_empty(self) -> bool:
        return self.n_rows == 0 or self.n_cols == 0

    @property
    def dtype(self):
        return self.X.dtype

    def to_dense(self) -> np.ndarray:
        return self.X.toarray() if self.issparse else np.asarray(self.X)

    def to_sparse(self, attr: str = "matrix") -> "LabeledMatrix":
        """Return a copy stored as `scipy.sparse.csc_matrix`. Values and labels are unchanged.

        Raises:
            StorageConversionError: the element type cannot be stored in a sparse matrix, or values changed during the
                conversion.
        """
        if not _is_supported_dtype(self.dtype):
            raise StorageConversionError(f"{attr}: cannot store elements of type {self.dtype} in a sparse matrix.")
        if self.issparse:
            X = self.X.tocsc(copy=True)
        else:
            try:
                X = sparse.csc_matrix(self.X)
            except (TypeError, ValueError) as e:
                raise StorageConversionError(f"{attr}: sparse conversion failed ({e}).") from e
            if X.dtype != self.dtype or not np.array_equal(X.toarray(), self.X, equal_nan=_has_nan(self.dtype)):
                raise StorageConversionError(f"{attr}: sparse conversion did not preserve numeric values.")
        return LabeledMatrix(X, row_names=self.row_names, col_names=self.col_names, attr=attr)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.to_dense(), index=self.row_names, columns=self.col_names)

    def subset_rows(self, rows: Iterable) -> "LabeledMatrix":
        """Select rows by label, in the order given."""
        rows = pd.Index(rows)
        missing = rows.difference(self.row_names)
        if len(missing) > 0:
            raise InvalidInputError(f"Rows {missing.tolist()[:5]} are not in the matrix.")
        idx = self.row_names.get_indexer(rows)
        X = self.X.tocsr()[idx, :].tocsc() if self.issparse else self.X[idx, :]
        return LabeledMatrix(X, row_names=rows, col_names=self.col_names)

    def copy(self) -> "LabeledMatrix":
        return LabeledMatrix(self.X.copy(), row_names=self.row_names.copy(), col_names=self.col_names.copy())

    def equals(self, other: "LabeledMatrix") -> bool:
        """Element-wise and label-wise equality regardless of storage format."""
        if not isinstance(other, LabeledMatrix) or self.shape != other.shape:
            return False
        return (
            self.row_names.equals(other.row_names)
            and self.col_names.equals(other.col_names)
            and np.array_equal(self.to_dense(), other.to_dense(), equal_nan=_has_nan(self.dtype))
        )

    def __repr__(self) -> str:
        storage = "sparse" if self.issparse else "dense"
        return f"LabeledMatrix({self.n_rows} x {self.n_cols}, {storage}, dtype={self.dtype})"


def _has_nan(dtype) -> bool:
    return np.issubdtype(dtype, np.floating) or np.issubdtype(dtype, np.complexfloating)


def _frame_is_sparse(df: pd.DataFrame) -> bool:
    return len(df.columns) > 0 and all(isinstance(dtype, pd.SparseDtype) for dtype in df.dtypes)


def as_labeled_matrix(
    matrix: Union[LabeledMatrix, pd.DataFrame, AnnData], layer: Optional[str] = None, attr: str = "matrix"
) -> LabeledMatrix:
    """Coerce the accepted matrix inputs into a `LabeledMatrix`.

    Args:
        matrix: A `LabeledMatrix`, a genes x cells data frame with labelled axes or a cells x genes AnnData.
        layer: Layer of the AnnData to use instead of `.X`.
        attr: Attribute name used in error messages.

    Returns:
        The wrapped matrix. Bare arrays carry no labels and are rejected.
    """
    if isinstance(matrix, LabeledMatrix):
        return matrix
    if isinstance(matrix, pd.DataFrame):
        return LabeledMatrix.from_frame(matrix, attr=attr)
    if isinstance(matrix, AnnData):
        return LabeledMatrix.from_anndata(matrix, layer=layer, attr=attr)
    if isinstance(matrix, np.ndarray) or sparse.issparse(matrix):
        raise InvalidInputError(
            f"{attr}: {type(matrix).__name__} has no row or column labels. Provide a data frame, an AnnData or a "
            f"LabeledMatrix."
        )
    raise InvalidInputError(f"{attr}: unsupported matrix type {type(matrix)}.")
