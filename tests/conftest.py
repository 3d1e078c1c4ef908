# Import all fixtures
from tests.fixtures.api import *  # noqa: F403
from tests.fixtures.database import *  # noqa: F403
from tests.fixtures.repositories import *  # noqa: F403
from tests.fixtures.services import *  # noqa: F403
