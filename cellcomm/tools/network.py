from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..configuration import CKM
from ..core.object import CommunicationObject
from ..errors import DimensionMismatchError, InvalidInputError
from ..logging import logger_manager as lm


@CKM.check_object_is_merged(merged=False)
def add_net(
    obj: CommunicationObject,
    prob: np.ndarray,
    pval: Optional[np.ndarray] = None,
    pairs: Optional[Sequence[str]] = None,
    copy: bool = False,
) -> Optional[CommunicationObject]:
    """Store the communication probabilities computed by an inference method.

    Args:
        obj: A single-dataset CommunicationObject.
        prob: Array of shape (K, K, N): the probability that sender group i communicates with receiver group j
            through ligand-receptor pair n. Values are stored as given, NaN included.
        pval: Optional p-values with the same shape as `prob`.
        pairs: Names of the N ligand-receptor pairs. Defaults to the interactions in `LR["LRsig"]`.
        copy: Whether to work on and return a copy of `obj` instead of updating it in place.

    Returns:
        The updated copy if `copy` is True, otherwise None.
    """
    prob = np.asarray(prob)
    if prob.ndim != 3 or prob.shape[0] != prob.shape[1]:
        raise DimensionMismatchError(f"net: probability tensor must have shape (K, K, N), got {prob.shape}.")
    if pval is not None:
        pval = np.asarray(pval)
        if pval.shape != prob.shape:
            raise DimensionMismatchError(f"net: p-values of shape {pval.shape} differ from probabilities {prob.shape}.")
    if len(obj.idents) > 0 and len(obj.idents.categories) != prob.shape[0]:
        raise DimensionMismatchError(
            f"net: {len(obj.idents.categories)} cell groups in idents but the tensor has K = {prob.shape[0]}."
        )
    if pairs is None and CKM.LR_SIG_KEY in obj.LR:
        pairs = obj.LR[CKM.LR_SIG_KEY].index
    if pairs is not None:
        pairs = list(pairs)
        if len(pairs) != prob.shape[2]:
            raise DimensionMismatchError(
                f"net: {len(pairs)} ligand-receptor pairs but the tensor has N = {prob.shape[2]}."
            )

    obj = obj.copy() if copy else obj
    net = {CKM.NET_PROB_KEY: prob}
    if pval is not None:
        net[CKM.NET_PVAL_KEY] = pval
    if pairs is not None:
        net[CKM.NET_PAIRS_KEY] = pairs
    lm.main_info_insert_attribute(", ".join(net.keys()), obj_attr=CKM.NET_KEY)
    obj.net = net
    return obj if copy else None


@CKM.check_object_is_merged(merged=False)
def aggregate_pathways(
    obj: CommunicationObject,
    pathway_key: str = CKM.DB_PATHWAY_KEY,
    thresh: Optional[float] = None,
    copy: bool = False,
) -> Optional[CommunicationObject]:
    """Summarize the communication probabilities on signaling pathway level.

    The probabilities of all ligand-receptor pairs sharing a pathway are summed, NaN entries contribute nothing.
    Pathways are ordered by decreasing total probability and pathways without any signal are dropped. The result is
    stored as `netP = {"pathways": [...], "prob": array of shape (K, K, P)}`.

    Args:
        obj: A single-dataset CommunicationObject with `net` populated.
        pathway_key: Column of the interaction table naming the pathway of each pair.
        thresh: If given, pair-level probabilities whose p-value exceeds `thresh` are ignored.
        copy: Whether to work on and return a copy of `obj` instead of updating it in place.

    Returns:
        The updated copy if `copy` is True, otherwise None.
    """
    prob = obj.probability_tensor
    if prob is None:
        raise InvalidInputError("net: no communication probabilities, run the inference first.")
    pairs = obj.net.get(CKM.NET_PAIRS_KEY)
    if pairs is None:
        raise InvalidInputError("net: ligand-receptor pair names are required to aggregate on pathway level.")

    if CKM.LR_SIG_KEY in obj.LR:
        interaction = obj.LR[CKM.LR_SIG_KEY]
    elif obj.DB is not None:
        interaction = obj.DB.interaction
    else:
        raise InvalidInputError("LR: no interaction table to look up pathways, run `subset_data` first.")
    if pathway_key not in interaction.columns:
        raise InvalidInputError(f"LR: interaction table has no `{pathway_key}` column.")
    missing = pd.Index(pairs).difference(interaction.index)
    if len(missing) > 0:
        raise InvalidInputError(f"net: pairs {missing.tolist()[:5]} are not in the interaction table.")
    pathway_of_pair = interaction.loc[pairs, pathway_key].to_numpy()

    prob = np.array(prob, dtype=float)
    if thresh is not None:
        pval = obj.net.get(CKM.NET_PVAL_KEY)
        if pval is None:
            raise InvalidInputError("net: `thresh` requires p-values in `net`.")
        prob[np.asarray(pval) > thresh] = 0

    pathways = pd.unique(pathway_of_pair)
    prob_pathways = np.zeros(prob.shape[:2] + (len(pathways),))
    for i, pathway in enumerate(pathways):
        prob_pathways[:, :, i] = np.nansum(prob[:, :, pathway_of_pair == pathway], axis=2)

    strength = prob_pathways.sum(axis=(0, 1))
    order = np.argsort(-strength, kind="stable")
    order = order[strength[order] > 0]
    lm.main_info(f"{len(order)} of {len(pathways)} signaling pathways carry signal.")

    obj = obj.copy() if copy else obj
    lm.main_info_insert_attribute(f"{CKM.NETP_PATHWAYS_KEY}, {CKM.NET_PROB_KEY}", obj_attr=CKM.NETP_KEY)
    obj.netP = {CKM.NETP_PATHWAYS_KEY: list(pathways[order]), CKM.NET_PROB_KEY: prob_pathways[:, :, order]}
    return obj if copy else None
