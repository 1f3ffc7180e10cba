from typing import Optional, Union

import numpy as np
import pandas as pd

from ..configuration import CKM
from ..core.object import CommunicationObject
from ..errors import DimensionMismatchError
from ..logging import logger_manager as lm


@CKM.check_object_is_merged(merged=False)
def add_dr(
    obj: CommunicationObject,
    method: str,
    coords: Union[np.ndarray, pd.DataFrame],
    copy: bool = False,
) -> Optional[CommunicationObject]:
    """Store a 2D embedding of the cells under `dr[method]`, as a data frame indexed by cell names."""
    coords = pd.DataFrame(coords)
    if coords.shape[1] != 2:
        raise DimensionMismatchError(f"dr[{method!r}]: expected 2 coordinates per cell, got {coords.shape[1]}.")
    if not obj.data.is_empty:
        if coords.shape[0] != obj.n_cells:
            raise DimensionMismatchError(f"dr[{method!r}]: has {coords.shape[0]} rows for {obj.n_cells} cells.")
        if isinstance(coords.index, pd.RangeIndex):
            coords.index = obj.cell_names
        elif not coords.index.equals(obj.cell_names):
            if len(obj.cell_names.difference(coords.index)) > 0:
                raise DimensionMismatchError(f"dr[{method!r}]: coordinates are indexed by different cells.")
            coords = coords.loc[obj.cell_names]

    obj = obj.copy() if copy else obj
    lm.main_info_insert_attribute(method, obj_attr=CKM.DR_KEY)
    obj.dr[method] = coords
    return obj if copy else None
