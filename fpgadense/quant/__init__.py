from .fixed import to_fixed, to_fixed_vector, to_fixed_matrix, from_fixed, \
        quantise_tensor, dequantise_tensor
