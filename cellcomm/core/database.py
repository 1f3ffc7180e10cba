from typing import List, Optional

import pandas as pd

from ..configuration import CKM
from ..errors import InvalidInputError


class LRDatabase(object):
    """Ligand-receptor interaction database.

    Holds the interaction table plus the optional tables describing multi-subunit complexes, cofactors and genes. The
    tables are copied on construction; the attributes return fresh copies, so edits never reach the database.

    Args:
        interaction: One row per ligand-receptor pair, indexed by interaction name. Requires the columns `ligand` and
            `receptor`; `pathway_name` is needed for pathway level aggregation.
        complex: Complex name (index) to subunit gene columns. Empty cells are ignored.
        cofactor: Cofactor name (index) to cofactor gene columns.
        gene_info: Free-form gene annotation table.
    """

    __slots__ = ("_interaction", "_complex", "_cofactor", "_gene_info")

    def __init__(
        self,
        interaction: pd.DataFrame,
        complex: Optional[pd.DataFrame] = None,
        cofactor: Optional[pd.DataFrame] = None,
        gene_info: Optional[pd.DataFrame] = None,
    ):
        missing = {CKM.DB_LIGAND_KEY, CKM.DB_RECEPTOR_KEY} - set(interaction.columns)
        if missing:
            raise InvalidInputError(f"DB: interaction table lacks columns {sorted(missing)}.")
        if interaction.shape[0] == 0:
            raise InvalidInputError("DB: interaction table is empty.")
        if not interaction.index.is_unique:
            raise InvalidInputError("DB: interaction names (index of the interaction table) must be unique.")

        object.__setattr__(self, "_interaction", interaction.copy())
        object.__setattr__(self, "_complex", pd.DataFrame() if complex is None else complex.copy())
        object.__setattr__(self, "_cofactor", pd.DataFrame() if cofactor is None else cofactor.copy())
        object.__setattr__(self, "_gene_info", pd.DataFrame() if gene_info is None else gene_info.copy())

    def __setattr__(self, key, value):
        raise AttributeError(f"LRDatabase is immutable, cannot set `{key}`.")

    def __delattr__(self, key):
        raise AttributeError(f"LRDatabase is immutable, cannot delete `{key}`.")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return LRDatabase, (self._interaction, self._complex, self._cofactor, self._gene_info)

    @property
    def interaction(self) -> pd.DataFrame:
        return self._interaction.copy()

    @property
    def complex(self) -> pd.DataFrame:
        return self._complex.copy()

    @property
    def cofactor(self) -> pd.DataFrame:
        return self._cofactor.copy()

    @property
    def gene_info(self) -> pd.DataFrame:
        return self._gene_info.copy()

    @property
    def n_interactions(self) -> int:
        return self._interaction.shape[0]

    def _resolve(self, name) -> List[str]:
        if pd.isna(name) or name == "":
            return []
        for table in (self._complex, self._cofactor):
            if name in table.index:
                subunits = table.loc[name]
                return [gene for gene in subunits.tolist() if isinstance(gene, str) and gene != ""]
        return [name]

    def ligand_genes(self, interaction_name) -> List[str]:
        return self._resolve(self._interaction.loc[interaction_name, CKM.DB_LIGAND_KEY])

    def receptor_genes(self, interaction_name) -> List[str]:
        return self._resolve(self._interaction.loc[interaction_name, CKM.DB_RECEPTOR_KEY])

    def genes(self) -> List[str]:
        """All genes referenced by the database: ligands, receptors, complex subunits and cofactors."""
        genes = []
        for column in (CKM.DB_LIGAND_KEY, CKM.DB_RECEPTOR_KEY):
            for name in self._interaction[column].unique():
                genes.extend(self._resolve(name))
        for table in (self._complex, self._cofactor):
            if table.shape[0] > 0:
                values = pd.Series(table.to_numpy().ravel())
                genes.extend(values[values.map(lambda gene: isinstance(gene, str) and gene != "")].tolist())
        return list(dict.fromkeys(genes))

    def __repr__(self) -> str:
        return (
            f"LRDatabase with {self.n_interactions} interactions, {self._complex.shape[0]} complexes, "
            f"{self._cofactor.shape[0]} cofactors."
        )
