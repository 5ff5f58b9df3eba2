"""Documentation generation constants.

These values shape which manifest nodes are documented, how prompts read,
and how generated content is named on disk and referenced from schema files.
"""

# =============================================================================
# Concurrency
# =============================================================================
# Hard cap on concurrent model-level generation calls. Protects the external
# service's rate limits; column calls for a model share the model's slot.

PARALLEL_LIMIT = 4

# =============================================================================
# Node Classification
# =============================================================================
# A manifest unique_id looks like "model.jaffle_shop.fct_orders". Only ids whose
# leading segment is MODEL_RESOURCE_TYPE are documented or indexed as dependents.

MODEL_RESOURCE_TYPE = "model"
STAGING_SEGMENT = "staging"
NOT_USED_SENTINEL = "Not used by any other models"

# =============================================================================
# Generated Artifacts
# =============================================================================
# DOC_ID_PREFIX namespaces every docs block we write so re-runs overwrite the
# same files. The markers wrap the body in a dbt docs block.

DOC_ID_PREFIX = "generated-doc:"
DOC_ID_SEPARATOR = ":"
DOC_FILE_SUFFIX = ".md"
DOCS_OPEN_MARKER = "{{% docs {identifier} %}}"
DOCS_CLOSE_MARKER = "{% enddocs %}"
DOC_REFERENCE = '{{{{ doc("{identifier}") }}}}'

SUMMARY_DISCLAIMER = (
    "This description is generated by an AI model. Take it with a grain of salt!\n"
)
COLUMN_PREFIX = "[ai-gen] "

# =============================================================================
# Schema Documents
# =============================================================================

MODELS_KEY = "models"
COLUMNS_KEY = "columns"
NAME_KEY = "name"
DESCRIPTION_KEY = "description"
PATCH_PATH_SCHEME = "://"
