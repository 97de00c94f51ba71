import random

EMPLOYEE_ID_PREFIX = "BST"
_LOW = 10000
_HIGH = 100000  # не включительно

_system_random = random.SystemRandom()


def generate_employee_id(rng: random.Random | None = None) -> str:
    """BST + случайное 5-значное число. Уникальность не проверяется здесь."""
    rng = rng or _system_random
    return f"{EMPLOYEE_ID_PREFIX}{rng.randrange(_LOW, _HIGH)}"
