"""Dependency graph between seeded tables."""

from collections import defaultdict, deque

from northwind_seed.exceptions import CircularDependencyError, MissingDependencyError
from northwind_seed.models import TableInfo


class DependencyGraph:
    """Directed graph for table dependencies."""

    def __init__(self):
        self._graph: dict[str, set[str]] = defaultdict(set)
        self._tables: set[str] = set()

    @classmethod
    def from_tables(
        cls,
        tables: list[TableInfo],
        extra: dict[str, set[str]] | None = None,
    ) -> "DependencyGraph":
        """
        Build a graph from foreign keys plus extra (non-FK) dependencies.

        Self-referencing FKs are skipped: rows of such tables only point at
        rows generated earlier in the same phase.

        Args:
            tables: Table definitions
            extra: Additional edges, e.g. reference data read from another table
        """
        graph = cls()
        for table in tables:
            graph.add_table(table.name)
            for fk in table.foreign_keys:
                if not fk.is_self_referencing:
                    graph.add_dependency(table.name, fk.referenced_table)
        for table, deps in (extra or {}).items():
            for dep in deps:
                graph.add_dependency(table, dep)
        return graph

    def add_table(self, table: str) -> None:
        """Add a table to the graph."""
        self._tables.add(table)
        if table not in self._graph:
            self._graph[table] = set()

    def add_dependency(self, table: str, depends_on: str) -> None:
        """Add a dependency: table depends on depends_on."""
        self._tables.add(table)
        self._tables.add(depends_on)
        self._graph[table].add(depends_on)

    def get_dependencies(self, table: str) -> list[str]:
        """Get all tables that this table depends on."""
        return sorted(self._graph.get(table, set()))

    def topological_sort(self) -> list[str]:
        """
        Sort tables in dependency order using Kahn's algorithm.

        Ties are broken alphabetically so the result is stable.

        Returns:
            Tables in order such that dependencies come before dependents.

        Raises:
            CircularDependencyError: If circular dependency detected
        """
        in_degree: dict[str, int] = {
            table: len(self._graph[table]) for table in self._tables
        }

        queue = deque(sorted(t for t in self._tables if in_degree[t] == 0))
        result = []

        while queue:
            table = queue.popleft()
            result.append(table)

            for other_table in sorted(self._tables):
                if table in self._graph[other_table]:
                    in_degree[other_table] -= 1
                    if in_degree[other_table] == 0:
                        queue.append(other_table)

        if len(result) != len(self._tables):
            missing = self._tables - set(result)
            raise CircularDependencyError(missing)

        return result

    def validate_order(self, order: list[str]) -> None:
        """
        Validate that every table comes after all of its dependencies.

        Args:
            order: Tables in the order they will be seeded

        Raises:
            MissingDependencyError: If a dependency is absent or comes later
        """
        position = {table: i for i, table in enumerate(order)}
        for i, table in enumerate(order):
            for dep in self.get_dependencies(table):
                if position.get(dep, len(order)) >= i:
                    raise MissingDependencyError(table, dep)
