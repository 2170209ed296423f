"""Shared test fixtures for workflow-graph."""

import pytest

from workflow_graph.scanning import ExportDecl, FileSummary, FunctionSummary, ImportDecl


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def summary(
    path: str,
    imports: list[tuple[str, list[str]]] | None = None,
    functions: int = 0,
    exports: int = 0,
) -> FileSummary:
    """Minimal FileSummary: ``imports`` is a list of (specifier, symbols)."""
    return FileSummary(
        path=path,
        functions=[FunctionSummary(name=f"fn{i}") for i in range(functions)],
        imports=[ImportDecl(source=src, specifiers=list(names)) for src, names in imports or []],
        exports=[ExportDecl(name=f"export{i}") for i in range(exports)],
    )


@pytest.fixture
def three_file_app():
    """index.ts -> App.tsx -> Button.tsx; App.tsx exports enough to rank high."""
    return [
        summary("index.ts", imports=[("./App", ["App"])]),
        summary("App.tsx", imports=[("./Button", ["Button"])], functions=1, exports=6),
        summary("Button.tsx", functions=1, exports=1),
    ]


@pytest.fixture
def missing_alias_import():
    """One unresolvable scoped import next to a resolvable one."""
    return [
        summary("src/index.ts", imports=[("@/lib/missing", ["x"]), ("./App", ["App"])]),
        summary("src/App.tsx"),
        summary("src/Header.tsx"),
    ]


@pytest.fixture
def two_islands():
    """Two directories with no relationship between them."""
    return [
        summary("admin/index.ts"),
        summary("admin/dashboard.tsx"),
        summary("public/widget.test.ts"),
        summary("public/widget.d.ts"),
    ]


@pytest.fixture
def large_repository():
    """500 equally important modules."""
    return [summary(f"src/modules/mod_{i}.ts") for i in range(500)]
