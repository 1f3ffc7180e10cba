# code adapted from https://github.com/aristoteleo/dynamo-release/blob/master/dynamo/configuration.py
import inspect
import logging
from functools import wraps
from typing import Tuple

from .errors import ConfigurationError
from .logging import logger_manager as lm


class CellCommConfig:
    def __init__(self, logging_level: int = logging.INFO):
        self.logging_level = logging_level

    @property
    def logging_level(self):
        return self.__logging_level

    @logging_level.setter
    def logging_level(self, level):
        lm.main_debug(f"Setting logging level to {level}.")
        if isinstance(level, str):
            level = level.lower()
            if level == "debug":
                level = logging.DEBUG
            elif level == "info":
                level = logging.INFO
            elif level == "warning":
                level = logging.WARNING
            elif level == "error":
                level = logging.ERROR
            elif level == "critical":
                level = logging.CRITICAL
            else:
                raise ConfigurationError(f"Unknown logging level `{level}`.")
        lm.main_set_level(level)
        self.__logging_level = level


config = CellCommConfig()


class CommunicationKeyManager:
    # Slot names of a CommunicationObject, in declaration order.
    DATA_RAW_KEY = "data_raw"
    DATA_KEY = "data"
    DATA_SIGNALING_KEY = "data_signaling"
    DATA_SCALE_KEY = "data_scale"
    DATA_PROJECT_KEY = "data_project"
    NET_KEY = "net"
    NETP_KEY = "netP"
    META_KEY = "meta"
    IDENTS_KEY = "idents"
    DB_KEY = "DB"
    LR_KEY = "LR"
    VAR_FEATURES_KEY = "var_features"
    DR_KEY = "dr"
    OPTIONS_KEY = "options"

    SLOTS = (
        DATA_RAW_KEY,
        DATA_KEY,
        DATA_SIGNALING_KEY,
        DATA_SCALE_KEY,
        DATA_PROJECT_KEY,
        NET_KEY,
        NETP_KEY,
        META_KEY,
        IDENTS_KEY,
        DB_KEY,
        LR_KEY,
        VAR_FEATURES_KEY,
        DR_KEY,
        OPTIONS_KEY,
    )
    MATRIX_SLOTS = (DATA_RAW_KEY, DATA_KEY, DATA_SIGNALING_KEY, DATA_SCALE_KEY, DATA_PROJECT_KEY)
    # Only these slots are carried over by `merge`.
    MERGED_SLOTS = (NET_KEY, NETP_KEY, IDENTS_KEY, LR_KEY)

    # Keys inside `net`, `netP` and `LR`.
    NET_PROB_KEY = "prob"
    NET_PVAL_KEY = "pval"
    NET_PAIRS_KEY = "pairs"
    NETP_PATHWAYS_KEY = "pathways"
    LR_SIG_KEY = "LRsig"

    # Columns of the ligand-receptor interaction table.
    DB_LIGAND_KEY = "ligand"
    DB_RECEPTOR_KEY = "receptor"
    DB_PATHWAY_KEY = "pathway_name"
    DB_INTERACTION_NAME_KEY = "interaction_name"

    OPTIONS_MODE_KEY = "mode"
    OPTIONS_MODE_SINGLE = "single"
    OPTIONS_MODE_MERGED = "merged"

    def is_merged(obj) -> bool:
        return getattr(obj, "merged_slots", None) is not None

    def check_object_is_merged(merged: bool = False, argname: str = "obj"):
        """Decorator that checks whether the CommunicationObject passed as `argname` is (or is not) a merged object."""

        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                # Get original, unwrapped function in case multiple decorators
                # are applied.
                unwrapped = inspect.unwrap(func)
                # Obtain arguments by name.
                call_args = inspect.getcallargs(unwrapped, *args, **kwargs)
                obj = call_args[argname]
                if CommunicationKeyManager.is_merged(obj) != merged:
                    expected = "a merged" if merged else "a single-dataset"
                    raise ConfigurationError(
                        f"CommunicationObject provided to `{argname}` argument must be {expected} object."
                    )
                return func(*args, **kwargs)

            return wrapper

        return decorator

    def merged_slot_message(slots: Tuple[str, ...] = MERGED_SLOTS) -> str:
        quoted = [f"'{slot}'" for slot in slots]
        return f"This function only merges the slots of {', '.join(quoted[:-1])} and {quoted[-1]}."


CKM = CommunicationKeyManager
