from typing import Optional, Sequence

import pandas as pd

from ..configuration import CKM
from ..core.database import LRDatabase
from ..core.object import CommunicationObject
from ..errors import ImmutableAttributeError, InvalidInputError
from ..logging import logger_manager as lm


@CKM.check_object_is_merged(merged=False)
def subset_data(
    obj: CommunicationObject,
    db: Optional[LRDatabase] = None,
    features: Optional[Sequence[str]] = None,
    copy: bool = False,
) -> Optional[CommunicationObject]:
    """Restrict the expression data to the signaling genes of the ligand-receptor database.

    Stores the restricted matrix in `data_signaling` and the interactions whose ligand and receptor genes (including
    every complex subunit) are all expressed in `LR["LRsig"]`.

    Args:
        obj: A single-dataset CommunicationObject with `data` populated.
        db: Database to attach to `obj.DB` first. Not needed if one is attached already.
        features: Optional genes to further restrict to, e.g. over-expressed genes.
        copy: Whether to work on and return a copy of `obj` instead of updating it in place.

    Returns:
        The updated copy if `copy` is True, otherwise None.
    """
    db = obj.DB if db is None else db
    if db is None:
        raise InvalidInputError("DB: no ligand-receptor database attached, pass `db`.")
    if not isinstance(db, LRDatabase):
        raise InvalidInputError(f"DB: expected an LRDatabase, got {type(db).__name__}.")
    if obj.DB is not None and db is not obj.DB:
        raise ImmutableAttributeError("DB: a ligand-receptor database is already attached and cannot be replaced.")
    if obj.data.is_empty:
        raise InvalidInputError("data: no expression data to subset.")

    genes = pd.Index(db.genes())
    if features is not None:
        genes = genes.intersection(pd.Index(features), sort=False)
    genes = obj.gene_names.intersection(genes, sort=False)
    if len(genes) == 0:
        raise InvalidInputError("data_signaling: no gene of the ligand-receptor database is present in `data`.")
    lm.main_info(f"Restricting data to {len(genes)} signaling genes.")
    data_signaling = obj.data.subset_rows(genes)

    expressed = set(genes)
    interaction = db.interaction
    keep = []
    for name in interaction.index:
        ligands, receptors = db.ligand_genes(name), db.receptor_genes(name)
        keep.append(len(ligands) > 0 and len(receptors) > 0 and set(ligands + receptors) <= expressed)
    lr_sig = interaction.loc[keep]
    lm.main_info(f"{lr_sig.shape[0]} of {interaction.shape[0]} interactions have all genes expressed.")

    obj = obj.copy() if copy else obj
    obj.DB = db
    obj.data_signaling = data_signaling
    lm.main_info_insert_attribute(CKM.LR_SIG_KEY, obj_attr=CKM.LR_KEY)
    obj.LR[CKM.LR_SIG_KEY] = lr_sig
    return obj if copy else None
