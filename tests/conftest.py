import pytest

from bftape import RunConfig

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


@pytest.fixture
def hello_world():
    return HELLO_WORLD


@pytest.fixture(params=[True, False], ids=["optimized", "plain"])
def config(request):
    """Run each test with and without folding."""
    return RunConfig(optimize=request.param)
