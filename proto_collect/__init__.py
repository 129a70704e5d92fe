# Lightweight package initializer: only pure-Python modules are imported here.
# The Arrow bridge imports pyarrow lazily and stays usable without it installed.
from .exceptions import ProtoBaseException, ProtoUserException, ProtoValidationException, \
    ProtoNotSupportedException, ProtoDumpAbortException
from . import common
from . import exceptions
from . import paths
from . import normalize
from . import predicates
from .common import Policy, DEFAULT_POLICY, MISSING, value
from .paths import data_get, data_set, data_fill, data_forget
from .normalize import objectable_items
from .predicates import Predicate, ValueEquals, KeyOperatorValue, where_clause, operator_for_where, value_retriever
from .diagnostics import Dumper, get_dumper, set_dumper
from .arrow_bridge import ArrowNotAvailable
from .collection import Collection, CollectionMode, collect
