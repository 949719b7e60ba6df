"""
These are the basic building blocks of the dense layer.
"""

MODULE_FONTSIZE=25

def int2bits(n):
    """
    helper function to get number of bits for integer
    """
    return (n-1).bit_length()

from .module import Port, ModuleBase, ModuleBaseMeta
from .vector_dot import VectorDot
from .accum import Accum
from .bias import Bias
from .activation import Activation, relu, hard_tanh, hard_sigmoid, identity, apply_activation
from .saturate import Saturate
