import pytest

from schemer.interpreter import Interpreter
from schemer.reader.parser import read


@pytest.fixture
def itp():
    """Interpreter with builtins and the derived-form prelude."""
    return Interpreter()


@pytest.fixture
def bare():
    """Interpreter with builtins only: no derived forms."""
    return Interpreter(prelude=None)


@pytest.fixture
def parse():
    """Read a single datum from source text."""
    def _parse(source: str):
        forms = read(source)
        assert len(forms) == 1
        return forms[0]
    return _parse
