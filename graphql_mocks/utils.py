"""
Utility Functions Module

Provides essential utilities:
- Logging configuration
- Schema loading from SDL files
- Export of mocked query results (CSV, JSON, Parquet)
"""

import sys
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Any, Union
import pandas as pd
from graphql import GraphQLSchema, build_schema
from logging.handlers import RotatingFileHandler


class FileHandler:
    """
    Handles file input/output operations

    Reads: GraphQL SDL, JSON variables
    Writes: CSV, JSON, Parquet
    """

    @staticmethod
    def read_schema(filepath: Union[str, Path]) -> GraphQLSchema:
        """
        Build a schema from an SDL file

        Args:
            filepath: Path to a .graphql / .gql file

        Returns:
            GraphQLSchema
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        try:
            return build_schema(filepath.read_text())
        except Exception as e:
            logging.error(f"Failed to build schema from {filepath}: {e}")
            raise

    @staticmethod
    def read_variables(value: Optional[str]) -> Dict[str, Any]:
        """
        Parse query variables given inline as JSON or as a path to a JSON file

        Args:
            value: JSON text, a file path, or None

        Returns:
            Variables dictionary
        """
        if not value:
            return {}

        path = Path(value)
        text = path.read_text() if path.suffix == '.json' and path.exists() else value
        variables = json.loads(text)

        if not isinstance(variables, dict):
            raise ValueError("Variables must be a JSON object")
        return variables

    @staticmethod
    def results_to_frame(results: List[Dict[str, Any]]) -> pd.DataFrame:
        """
        Flatten query results into one row per result

        Nested objects become dotted column names; lists are kept as cells.
        """
        return pd.json_normalize(results)

    @staticmethod
    def write_results(
        results: List[Dict[str, Any]],
        filepath: Union[str, Path],
        **kwargs
    ) -> pd.DataFrame:
        """
        Write mocked query results based on extension

        Args:
            results: The `data` part of each execution result
            filepath: Output file path
            **kwargs: Additional arguments for pandas writers

        Returns:
            The DataFrame that was written
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        extension = filepath.suffix.lower()
        data = FileHandler.results_to_frame(results)

        try:
            if extension == '.csv':
                data.to_csv(filepath, index=False, **kwargs)
            elif extension == '.json':
                data.to_json(filepath, orient='records', indent=2, default_handler=str, **kwargs)
            elif extension == '.parquet':
                data.to_parquet(filepath, index=False, **kwargs)
            else:
                raise ValueError(f"Unsupported file format: {extension}")

            logging.info(f"Wrote {len(data)} results to {filepath}")
            return data

        except Exception as e:
            logging.error(f"Failed to write {filepath}: {e}")
            raise


class LoggerConfig:
    """
    Logging configuration manager

    Sets up consistent logging across the application
    """

    @staticmethod
    def setup_logger(
        name: str = "graphql_mocks",
        level: int = logging.INFO,
        log_file: Optional[Union[str, Path]] = None,
        log_to_console: bool = True,
        log_format: Optional[str] = None
    ) -> logging.Logger:
        """
        Setup and configure logger

        Args:
            name: Logger name
            level: Logging level
            log_file: Optional file path for file logging
            log_to_console: Whether to log to console
            log_format: Custom log format

        Returns:
            Configured logger
        """
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Remove existing handlers
        logger.handlers.clear()

        if log_format is None:
            log_format = (
                '%(asctime)s - %(name)s - %(levelname)s - '
                '%(filename)s:%(lineno)d - %(message)s'
            )

        formatter = logging.Formatter(log_format)

        if log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        return logger


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
):
    """
    Quick logging setup

    Args:
        level: Logging level (number or name such as "DEBUG")
        log_file: Optional log file path
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    LoggerConfig.setup_logger(level=level, log_file=log_file)


def read_schema(filepath: Union[str, Path]) -> GraphQLSchema:
    """Quick schema loading"""
    return FileHandler.read_schema(filepath)


def write_results(results: List[Dict[str, Any]], filepath: Union[str, Path], **kwargs) -> pd.DataFrame:
    """Quick results writing"""
    return FileHandler.write_results(results, filepath, **kwargs)
