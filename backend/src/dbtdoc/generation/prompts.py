# backend/src/dbtdoc/generation/prompts.py
"""Prompt templates for model and column documentation."""

from dataclasses import dataclass
from typing import Any

from dbtdoc.graph.index import ReverseDependencyIndex
from dbtdoc.manifest.models import ColumnMetadata, NodeMetadata


@dataclass
class PromptTemplate:
    """A template for generating prompts with variable substitution."""

    template: str

    def render(self, **kwargs: Any) -> str:
        """Render the template with the given variables.

        Args:
            **kwargs: Variables to substitute into the template.

        Returns:
            The rendered template string.

        Raises:
            KeyError: If a required variable is missing.
        """
        return self.template.format(**kwargs)


# =============================================================================
# Model Template
# =============================================================================

MODEL_TEMPLATE = PromptTemplate(
    """Write markdown documentation to explain the following DBT model. Be clear and informative, but also accurate. The only information available is the metadata below.
Explain the raw SQL, then explain the dependencies. Do not list the SQL code or column names themselves; an explanation is sufficient.

Model name: {model_name}
Raw SQL code: {raw_code}
Depends on: {depends_on}
Depended on by: {depended_on_by}
{staging_note}
First, generate a human-readable name for the table as the title (i.e. fct_orders -> # Orders Fact Table).
Then, describe the dependencies (both model dependencies and the warehouse tables used by the SQL.) Do this under ## Dependencies.
Then, describe what other models reference this model in ## How it's used
Then summarize the model logic in ## Summary.
"""
)

STAGING_NOTE = "\nThis is a staging model. Be sure to mention that in the summary.\n"


# =============================================================================
# Column Template
# =============================================================================

COLUMN_TEMPLATE = PromptTemplate(
    """Write markdown documentation to explain the following DBT column in the context of the parent model and SQL code. Be clear and informative, but also accurate. The only information available is the metadata below.
Do not list the SQL code or column names themselves; an explanation is sufficient.

Column Name: {column_name}
Parent Model name: {model_name}
Raw SQL code: {raw_code}

First, explain the meaning of the column in plain, non-technical English.
Then, explain how the column is extracted in code.
"""
)


def get_model_prompt(node: NodeMetadata, reverse_index: ReverseDependencyIndex) -> str:
    """Render the model-level prompt.

    Args:
        node: Model to document.
        reverse_index: Reverse-dependency index for "Depended on by".

    Returns:
        Prompt text. Identical inputs always render identical text.
    """
    return MODEL_TEMPLATE.render(
        model_name=node.name,
        raw_code=node.raw_code,
        depends_on=",".join(node.depends_on.nodes),
        depended_on_by=reverse_index.describe_dependents(node.unique_id),
        staging_note=STAGING_NOTE if node.is_staging else "",
    )


def get_column_prompt(node: NodeMetadata, column: ColumnMetadata) -> str:
    """Render the prompt for one undocumented column of a model."""
    return COLUMN_TEMPLATE.render(
        column_name=column.name,
        model_name=node.name,
        raw_code=node.raw_code,
    )
