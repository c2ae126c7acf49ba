"""
DuckDB-based batch processing of Plus Codes.

This module registers the codec as SQL scalar functions on a DuckDB
connection, so that whole CSV or Parquet tables of coordinates can be
encoded, decoded, shortened or recovered with ordinary queries:

    SELECT name, olc_encode(lat, lon, 10) AS plus_code
    FROM read_csv_auto('places.csv')
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import duckdb
from duckdb.sqltypes import BOOLEAN, DOUBLE, INTEGER, VARCHAR

from .codec import decode, encode, MIN_DIGIT_COUNT, MAX_DIGIT_COUNT, PAIR_CODE_LENGTH
from .shorten import recover_nearest, shorten
from .syntax import is_full, is_valid


# Readers for supported input files, keyed by suffix
_READERS = {
    ".csv": "read_csv_auto",
    ".parquet": "read_parquet",
}

# COPY formats for supported output files, keyed by suffix
_WRITERS = {
    ".csv": "(FORMAT CSV, HEADER)",
    ".parquet": "(FORMAT PARQUET)",
}


@dataclass
class BatchConfig:
    """Configuration for batch encoding a table of coordinates."""

    lat_column: str = "lat"
    """Name of the latitude column in the input."""

    lon_column: str = "lon"
    """Name of the longitude column in the input."""

    code_length: int = PAIR_CODE_LENGTH
    """Number of significant digits in the produced codes."""

    code_column: str = "plus_code"
    """Name of the column added to the output."""

    def __post_init__(self):
        if not MIN_DIGIT_COUNT <= self.code_length <= MAX_DIGIT_COUNT:
            raise ValueError(
                f"code_length must be between {MIN_DIGIT_COUNT} and {MAX_DIGIT_COUNT}"
            )
        for name in ("lat_column", "lon_column", "code_column"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _udf_encode(lat: Optional[float], lon: Optional[float], length: Optional[int]) -> Optional[str]:
    if lat is None or lon is None:
        return None
    return encode(lat, lon, PAIR_CODE_LENGTH if length is None else length) or None


def _udf_is_valid(code: Optional[str]) -> Optional[bool]:
    if code is None:
        return None
    return is_valid(code)


def _udf_is_full(code: Optional[str]) -> Optional[bool]:
    if code is None:
        return None
    return is_full(code)


def _udf_decode_lat(code: Optional[str]) -> Optional[float]:
    area = decode(code) if code is not None else None
    if area is None:
        return None
    return area.center.lat


def _udf_decode_lon(code: Optional[str]) -> Optional[float]:
    area = decode(code) if code is not None else None
    if area is None:
        return None
    return area.center.lon


def _udf_shorten(code: Optional[str], lat: Optional[float], lon: Optional[float]) -> Optional[str]:
    if code is None or lat is None or lon is None:
        return None
    return shorten(code, lat, lon) or None


def _udf_recover(code: Optional[str], lat: Optional[float], lon: Optional[float]) -> Optional[str]:
    if code is None or lat is None or lon is None:
        return None
    return recover_nearest(code, lat, lon) or None


# (SQL name, function, parameter types, return type)
SQL_FUNCTIONS = (
    ("olc_encode", _udf_encode, [DOUBLE, DOUBLE, INTEGER], VARCHAR),
    ("olc_is_valid", _udf_is_valid, [VARCHAR], BOOLEAN),
    ("olc_is_full", _udf_is_full, [VARCHAR], BOOLEAN),
    ("olc_decode_lat", _udf_decode_lat, [VARCHAR], DOUBLE),
    ("olc_decode_lon", _udf_decode_lon, [VARCHAR], DOUBLE),
    ("olc_shorten", _udf_shorten, [VARCHAR, DOUBLE, DOUBLE], VARCHAR),
    ("olc_recover", _udf_recover, [VARCHAR, DOUBLE, DOUBLE], VARCHAR),
)


class PlusCodeDatabase:
    """
    A DuckDB connection with the Plus Code SQL functions registered.

    Invalid codes and unconvertible inputs produce SQL NULL rather than
    failing the query.
    """

    def __init__(self, database: str = ":memory:"):
        """
        Initialize the database.

        Args:
            database: DuckDB database path, in memory by default
        """
        self._con = duckdb.connect(database)
        self._register_functions()

    def _register_functions(self) -> None:
        """Register the codec functions on the connection."""
        for name, func, parameters, return_type in SQL_FUNCTIONS:
            self._con.create_function(
                name, func, parameters, return_type, null_handling="special"
            )

    def execute(self, query: str, parameters: Optional[Sequence[Any]] = None) -> List[Tuple]:
        """
        Run a query and fetch all rows.

        Args:
            query: SQL text, may use the olc_* functions
            parameters: Values for ? placeholders

        Returns:
            List of result rows
        """
        if parameters is None:
            return self._con.execute(query).fetchall()
        return self._con.execute(query, list(parameters)).fetchall()

    def _source_expression(self, path: Path) -> str:
        """Build the table function call that reads an input file."""
        if not path.exists():
            raise FileNotFoundError(f"Could not find input file {path}")

        reader = _READERS.get(path.suffix.lower())
        if reader is None:
            raise ValueError(f"Unsupported input file type: {path.suffix}")

        return f"{reader}({_quote_literal(str(path))})"

    def _encode_query(self, source: Path, config: BatchConfig) -> str:
        return f"""
            SELECT *,
                olc_encode(
                    {_quote_identifier(config.lat_column)},
                    {_quote_identifier(config.lon_column)},
                    {config.code_length}
                ) AS {_quote_identifier(config.code_column)}
            FROM {self._source_expression(source)}
        """

    def encode_file(self, source: Path, config: Optional[BatchConfig] = None) -> List[Tuple]:
        """
        Encode every row of a CSV or Parquet file.

        Args:
            source: Input file with latitude and longitude columns
            config: Column names and code length

        Returns:
            All input columns of each row followed by its code
        """
        config = config or BatchConfig()
        return self.execute(self._encode_query(source, config))

    def write_encoded(
        self,
        source: Path,
        destination: Path,
        config: Optional[BatchConfig] = None,
    ) -> int:
        """
        Encode a CSV or Parquet file and write the result to another file.

        The output format follows the destination suffix.

        Args:
            source: Input file with latitude and longitude columns
            destination: Output .csv or .parquet file
            config: Column names and code length

        Returns:
            Number of rows written
        """
        config = config or BatchConfig()

        copy_options = _WRITERS.get(destination.suffix.lower())
        if copy_options is None:
            raise ValueError(f"Unsupported output file type: {destination.suffix}")

        query = self._encode_query(source, config)
        self._con.execute(
            f"COPY ({query}) TO {_quote_literal(str(destination))} {copy_options}"
        )

        (count,) = self._con.execute(
            f"SELECT count(*) FROM {self._source_expression(source)}"
        ).fetchone()
        return count

    def close(self) -> None:
        """Close the database connection."""
        if self._con:
            self._con.close()
            self._con = None

    def __del__(self):
        """Cleanup on garbage collection."""
        self.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
