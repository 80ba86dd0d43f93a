"""
Device selection for the batched distance computations.

Distances are computed in float64 so that batched results match the
per-tuple arithmetic exactly; only devices with float64 support (CPU and
CUDA) are accepted.
"""

from typing import Optional, Union
import torch
import warnings


def get_default_device() -> torch.device:
    """Get the default device based on availability.

    Returns:
        Default device (cuda if available, else cpu)
    """
    if torch.cuda.is_available():
        return torch.device('cuda')
    return torch.device('cpu')


def parse_device(device: Optional[Union[str, torch.device]] = None) -> torch.device:
    """Parse device specification.

    Args:
        device: Device specification
            - None or 'auto': Use best available
            - 'cpu': Use CPU
            - 'cuda': Use default CUDA device
            - 'cuda:X': Use CUDA device X
            - torch.device: Use as-is

    Returns:
        Parsed device

    Raises:
        ValueError: For unknown devices or devices without float64 support
        TypeError: If ``device`` is neither a string nor a torch.device
    """
    if device is None or device == 'auto':
        return get_default_device()

    if isinstance(device, torch.device):
        device_type = device.type
    elif isinstance(device, str):
        device_type = device.split(':', 1)[0]
    else:
        raise TypeError(f"Device must be str or torch.device, got {type(device)}")

    if device_type == 'cpu':
        return torch.device('cpu')
    if device_type == 'cuda':
        if not torch.cuda.is_available():
            warnings.warn("CUDA not available, falling back to CPU")
            return torch.device('cpu')
        return torch.device(device)
    if device_type == 'mps':
        raise ValueError("MPS does not support float64 distances, use 'cpu' instead")
    raise ValueError(f"Unknown device: {device}")
