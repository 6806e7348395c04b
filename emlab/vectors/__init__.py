"""Vector calculus: preset fields, numerical operators, vector algebra."""

from .differential import gradient, divergence, curl, laplacian
from .scalar_fields import SCALAR_PRESETS, sample_scalar_field
from .vector_fields import VECTOR_PRESETS, sample_vector_field
from .vector_ops import vector_add, vector_sub, cross_product, project
