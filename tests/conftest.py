import pytest


class CleanupLog:
    '''Deleter recording every cleanup as "cleaned <value>"'''

    def __init__(self) -> None:
        self.out = ""
        self.calls: list[object] = []

    def __call__(self, value: object) -> None:
        self.calls.append(value)
        self.out += f"cleaned {value}"


@pytest.fixture
def log() -> CleanupLog:
    return CleanupLog()
