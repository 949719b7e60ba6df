"""
Layers are comprised of modules. They have the same functionality as the equivalent layers of the neural network model.
"""

from .layer import LayerBase, LayerBaseMeta
from .dense import DenseLayer
