#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from docparams.validate import validate_arguments


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def documented_method() -> Callable[..., Callable[..., None]]:
    """Fixture to create a bound method with the given docstring that validates its arguments."""

    def _create(doc: str | None, **options) -> Callable[..., None]:

        class Service:
            def call(self, a=None, b=None, c=None):
                validate_arguments(**options)

        Service.call.__doc__ = doc
        return Service().call

    return _create
