"""
Pack runtime.

The declarative surface a pack registers with its host: formulas (plain
and action), sync tables, column formats, network domains and user
authentication. The host hands every invocation an ExecutionContext whose
fetcher performs the HTTP calls.

    pack = Pack()
    pack.add_formula(Formula(name="GetTask", ...))
    task = await pack.execute_formula("GetTask", [url], context)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)

from todoist_pack.exceptions import TodoistConfigurationError, TodoistValidationError
from todoist_pack.models.schema import RowModel

logger = logging.getLogger(__name__)


# =============================================================================
# Fetching
# =============================================================================


@dataclass
class FetchRequest:
    """An HTTP request issued by a formula or sync table."""

    method: str
    url: str
    params: Optional[dict[str, Any]] = None
    headers: Optional[dict[str, str]] = None
    json: Any = None
    # None uses the fetcher's default; 0 bypasses the cache.
    cache_ttl_secs: Optional[int] = None


@dataclass
class FetchResponse:
    """A successful (2xx) HTTP response with its body decoded."""

    status_code: int
    body: Any
    headers: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class Fetcher(Protocol):
    """
    Authenticated HTTP capability supplied by the host.

    Implementations add the user's credentials, may cache GET responses and
    must raise a TodoistAPIError for any non-2xx response.
    """

    async def fetch(self, request: FetchRequest) -> FetchResponse:
        ...


@dataclass
class ExecutionContext:
    """Per-invocation context handed to formulas and sync tables."""

    fetcher: Fetcher

    async def fetch(self, method: str, url: str, **kwargs: Any) -> FetchResponse:
        return await self.fetcher.fetch(FetchRequest(method=method, url=url, **kwargs))


# =============================================================================
# Declarations
# =============================================================================


class ParameterType(str, Enum):
    STRING = "string"
    NUMBER = "number"


class ResultType(str, Enum):
    STRING = "string"
    OBJECT = "object"


AutocompleteFn = Callable[[ExecutionContext, str], Awaitable[list[dict[str, Any]]]]


@dataclass
class Parameter:
    """A formula parameter."""

    name: str
    type: ParameterType
    description: str = ""
    optional: bool = False
    autocomplete: Optional[AutocompleteFn] = None

    def validate(self, value: Any) -> Any:
        if value is None:
            if not self.optional:
                raise TodoistValidationError(f"Missing required parameter: {self.name}")
            return None
        if self.type == ParameterType.NUMBER:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TodoistValidationError(
                    f"Parameter {self.name} must be a number, got {type(value).__name__}"
                )
        elif not isinstance(value, str):
            raise TodoistValidationError(
                f"Parameter {self.name} must be a string, got {type(value).__name__}"
            )
        return value


@dataclass
class Formula:
    """A named operation the host can invoke."""

    name: str
    description: str
    execute: Callable[..., Awaitable[Any]]
    parameters: list[Parameter] = field(default_factory=list)
    result_type: ResultType = ResultType.OBJECT
    schema: Optional[type[RowModel]] = None
    is_action: bool = False
    extra_oauth_scopes: list[str] = field(default_factory=list)

    def bind(self, args: Sequence[Any]) -> list[Any]:
        """Validate positional arguments, padding omitted optional ones."""
        if len(args) > len(self.parameters):
            raise TodoistValidationError(
                f"{self.name} takes {len(self.parameters)} parameters, got {len(args)}"
            )
        padded = list(args) + [None] * (len(self.parameters) - len(args))
        return [param.validate(value) for param, value in zip(self.parameters, padded)]

    def get_parameter(self, name: str) -> Parameter:
        for param in self.parameters:
            if param.name == name:
                return param
        raise TodoistValidationError(f"{self.name} has no parameter named {name}")


@dataclass
class SyncTable:
    """A table whose rows are refreshed by re-running its formula."""

    name: str
    schema: type[RowModel]
    formula: Formula

    @property
    def identity_name(self) -> str:
        return self.schema.identity


@dataclass
class ColumnFormat:
    """Turns pasted text matching one of the patterns into a formula result."""

    name: str
    formula_name: str
    matchers: list[re.Pattern[str]]

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.matchers)


@dataclass
class OAuth2Authentication:
    """Per-user OAuth2 authorization-code authentication."""

    authorization_url: str
    token_url: str
    scopes: list[str]
    scope_delimiter: str = " "
    get_connection_name: Optional[Callable[[ExecutionContext], Awaitable[Optional[str]]]] = None

    @property
    def scope(self) -> str:
        """Scopes encoded for the authorize request."""
        return self.scope_delimiter.join(self.scopes)


# =============================================================================
# Pack
# =============================================================================


class Pack:
    """Registry of everything a pack exposes to its host."""

    def __init__(self) -> None:
        self.network_domains: list[str] = []
        self.authentication: Optional[OAuth2Authentication] = None
        self.formulas: dict[str, Formula] = {}
        self.sync_tables: dict[str, SyncTable] = {}
        self.column_formats: list[ColumnFormat] = []

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_network_domain(self, domain: str) -> None:
        self.network_domains.append(domain)

    def set_user_authentication(self, authentication: OAuth2Authentication) -> None:
        self.authentication = authentication

    def add_formula(self, formula: Formula) -> Formula:
        if formula.name in self.formulas:
            raise TodoistConfigurationError(f"Duplicate formula: {formula.name}")
        self.formulas[formula.name] = formula
        return formula

    def add_sync_table(self, table: SyncTable) -> SyncTable:
        if table.name in self.sync_tables:
            raise TodoistConfigurationError(f"Duplicate sync table: {table.name}")
        self.sync_tables[table.name] = table
        return table

    def add_column_format(self, column_format: ColumnFormat) -> ColumnFormat:
        if column_format.formula_name not in self.formulas:
            raise TodoistConfigurationError(
                f"Column format {column_format.name} refers to unknown formula "
                f"{column_format.formula_name}"
            )
        self.column_formats.append(column_format)
        return column_format

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_formula(self, name: str) -> Formula:
        try:
            return self.formulas[name]
        except KeyError:
            raise TodoistConfigurationError(f"Unknown formula: {name}") from None

    def get_sync_table(self, name: str) -> SyncTable:
        try:
            return self.sync_tables[name]
        except KeyError:
            raise TodoistConfigurationError(f"Unknown sync table: {name}") from None

    def match_column_format(self, text: str) -> Optional[ColumnFormat]:
        for column_format in self.column_formats:
            if column_format.matches(text):
                return column_format
        return None

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    async def execute_formula(
        self,
        name: str,
        args: Sequence[Any],
        context: ExecutionContext,
    ) -> Any:
        formula = self.get_formula(name)
        bound = formula.bind(args)
        logger.debug("Executing formula %s", name)
        return await formula.execute(context, *bound)

    async def execute_sync_table(
        self,
        name: str,
        args: Sequence[Any],
        context: ExecutionContext,
    ) -> list[RowModel]:
        """
        Run a sync table's formula and return the full snapshot of rows.

        Rows sharing an identity with an earlier row are dropped so that the
        host never receives two rows for the same id.
        """
        table = self.get_sync_table(name)
        bound = table.formula.bind(args)
        logger.info("Syncing table %s", name)
        rows = await table.formula.execute(context, *bound)

        seen: set[Any] = set()
        result: list[RowModel] = []
        for row in rows:
            if row.row_id is None:
                result.append(row)
                continue
            if row.row_id in seen:
                logger.warning("Dropping duplicate %s row %r", table.identity_name, row.row_id)
                continue
            seen.add(row.row_id)
            result.append(row)

        logger.info("Synced %d rows into %s", len(result), name)
        return result

    async def resolve_column_value(self, text: str, context: ExecutionContext) -> Any:
        """Resolve pasted text through the first matching column format."""
        column_format = self.match_column_format(text)
        if column_format is None:
            raise TodoistValidationError(f"No column format matches: {text}")
        return await self.execute_formula(column_format.formula_name, [text], context)

    async def autocomplete(
        self,
        formula_name: str,
        parameter_name: str,
        search: str,
        context: ExecutionContext,
    ) -> list[dict[str, Any]]:
        formula = self._find_formula(formula_name)
        param = formula.get_parameter(parameter_name)
        if param.autocomplete is None:
            raise TodoistValidationError(f"Parameter {parameter_name} has no autocomplete")
        return await param.autocomplete(context, search)

    async def get_connection_name(self, context: ExecutionContext) -> Optional[str]:
        if self.authentication is None or self.authentication.get_connection_name is None:
            return None
        return await self.authentication.get_connection_name(context)

    def _find_formula(self, name: str) -> Formula:
        """Find a formula, including the formulas behind sync tables."""
        if name in self.formulas:
            return self.formulas[name]
        for table in self.sync_tables.values():
            if table.formula.name == name:
                return table.formula
        raise TodoistConfigurationError(f"Unknown formula: {name}")


def autocomplete_search_objects(
    search: str,
    objects: Sequence[Mapping[str, Any]],
    display_key: str,
    value_key: str,
) -> list[dict[str, Any]]:
    """Options whose display value contains the search text (case-insensitive)."""
    needle = (search or "").lower()
    options = []
    for obj in objects:
        display = obj.get(display_key)
        if display is None:
            continue
        if needle and needle not in str(display).lower():
            continue
        options.append({"display": display, "value": obj.get(value_key)})
    return options
