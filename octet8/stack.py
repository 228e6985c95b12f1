"""CHIP-8 stack operations."""

import jax.numpy as jnp
from octet8.constants import STACK_SIZE
from octet8.errors import StackOverflowError, StackUnderflowError
from octet8.state import StackState


def depth(stack: StackState) -> int:
    """Number of return addresses currently on the stack."""
    return int(stack.pointer)


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push return address onto stack."""
    pointer = depth(stack)
    if pointer >= STACK_SIZE:
        raise StackOverflowError(f"Call stack exhausted ({STACK_SIZE} frames)")
    new_data = stack.data.at[pointer].set(address)
    return stack.replace(data=new_data, pointer=pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop return address from stack."""
    if depth(stack) == 0:
        raise StackUnderflowError("Return with an empty call stack")
    new_pointer = depth(stack) - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
