import random
import time


def generate_number(prefix, clock=time.time):
    """
    Generate a human-readable record number.

    Args:
        prefix (str): The prefix for the number (e.g., 'ORD', 'RET')
        clock (callable): Returns the current epoch time in seconds

    Returns:
        str: "<prefix>-<epoch milliseconds>-<4 random digits>"
    """
    millis = int(clock() * 1000)
    suffix = random.randint(0, 9999)
    return f"{prefix}-{millis}-{suffix:04d}"
