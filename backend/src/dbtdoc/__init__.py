"""dbtdoc: LLM-generated documentation for dbt models."""

__version__ = "0.1.0"
