from .embedding import add_dr
from .network import add_net, aggregate_pathways
from .subset import subset_data
