from typing import Optional, Union

import pandas as pd
from anndata import AnnData

from ..errors import InvalidInputError
from ..logging import logger_manager as lm
from .matrix import LabeledMatrix, _is_supported_dtype, as_labeled_matrix
from .object import CommunicationObject


def create(
    raw_matrix: Union[LabeledMatrix, pd.DataFrame, AnnData],
    use_sparse_storage: bool = True,
    meta: Optional[pd.DataFrame] = None,
    group_by: Optional[str] = None,
    layer: Optional[str] = None,
) -> CommunicationObject:
    """Create a new CommunicationObject from a single-cell expression matrix.

    Args:
        raw_matrix: Genes x cells matrix with gene identifiers as row labels and cell identifiers as column labels,
            given as a `LabeledMatrix` or a `pd.DataFrame`. A cells x genes AnnData is transposed.
        use_sparse_storage: Whether to store the matrix in compressed sparse column format. Only the storage changes,
            values and labels are kept as they are.
        meta: Per-cell annotations indexed by cell identifiers.
        group_by: Column of `meta` defining the cell groups.
        layer: Layer of an AnnData input to use instead of `.X`.

    Returns:
        A CommunicationObject holding the matrix in `data`. All other slots are empty unless `meta`/`group_by` are
        given.

    Raises:
        InvalidInputError: the matrix has no row or column labels, has zero rows or columns, or holds non-numeric
            elements.
        StorageConversionError: the matrix cannot be stored sparsely without changing its values.
    """
    lm.main_log_time()
    data = as_labeled_matrix(raw_matrix, layer=layer, attr="data")
    if data.is_empty:
        raise InvalidInputError(f"data: matrix must have at least one row and one column, got shape {data.shape}.")

    if use_sparse_storage:
        lm.main_debug("Converting data to compressed sparse column storage.")
        data = data.to_sparse(attr="data")
    elif not _is_supported_dtype(data.dtype):
        raise InvalidInputError(f"data: elements of type {data.dtype} are not numeric.")

    obj = CommunicationObject(data=data)
    if meta is not None:
        obj.add_meta(meta)
    elif isinstance(raw_matrix, AnnData) and raw_matrix.obs.shape[1] > 0:
        lm.main_info("Using `.obs` of the AnnData as cell metadata.")
        obj.add_meta(raw_matrix.obs)
    if group_by is not None:
        if group_by not in obj.meta.columns:
            raise InvalidInputError(f"idents: `group_by` column `{group_by}` is not in the cell metadata.")
        obj.set_idents(group_by)

    lm.main_info(f"Created a CommunicationObject with {obj.n_genes} genes and {obj.n_cells} cells.")
    lm.main_finish_progress(progress_name="create")
    return obj
