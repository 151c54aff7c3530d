"""Clients for external services used by the orchestration core."""

from .oracle_client import LangChainOracle, OracleClient


__all__ = ["LangChainOracle", "OracleClient"]
