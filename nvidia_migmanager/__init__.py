"""Host agent that reconciles the MIG mode of NVIDIA GPUs."""

__version__ = "1.0.0"
