import pytest

from fakes import FakeService, course, professor


@pytest.fixture
def service():
    return FakeService(
        responses={
            "cse": [course("CSE 3320 OPERATING SYSTEMS"), course("CSE 1310 INTRO TO PROGRAMMING")],
            "cse 3": [course("CSE 3320 OPERATING SYSTEMS")],
            "smith": [professor("Jane Smith")],
        }
    )
