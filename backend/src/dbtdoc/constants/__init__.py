"""Configuration constants.

Re-exports all constants for convenient importing:
    from dbtdoc.constants import PARALLEL_LIMIT, DOC_ID_PREFIX
"""

from dbtdoc.constants.generation import *  # noqa: F403
from dbtdoc.constants.llm import *  # noqa: F403
