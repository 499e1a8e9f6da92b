# models.py
# small containers passed between the builder, the DB client and the mapper
from dataclasses import dataclass, field
from typing import List, Any, Dict


@dataclass(frozen=True)
class TableRef:
    schema: str
    name: str

    def folded(self) -> "TableRef":
        """Lowercased copy; identifiers are always case-folded in SQL text."""
        return TableRef(self.schema.lower(), self.name.lower())

    def __str__(self):
        return f"{self.schema}.{self.name}"


@dataclass
class QueryResult:
    columns: List[str] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)
    rowcount: int = -1


@dataclass
class Envelope:
    status: int
    body: Dict[str, Any]
