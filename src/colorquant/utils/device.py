"""
Device management utilities for GPU/CPU computation.

Provides device selection and sizing of the assignment chunks so the
(chunk, K, d) distance temporaries fit in memory.
"""

from typing import Optional, Union
import torch
import warnings


def get_default_device(dtype: Optional[torch.dtype] = None) -> torch.device:
    """Get the default device based on availability.

    MPS has no float64 support, so it is skipped for float64 work.

    Args:
        dtype: Working dtype the device has to support

    Returns:
        Default device (cuda if available, else mps, else cpu)
    """
    if torch.cuda.is_available():
        return torch.device('cuda')
    elif _mps_available() and dtype != torch.float64:
        return torch.device('mps')
    else:
        return torch.device('cpu')


def _mps_available() -> bool:
    return hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()


def parse_device(device: Optional[Union[str, torch.device]] = None,
                 dtype: Optional[torch.dtype] = None) -> torch.device:
    """Parse device specification.

    Args:
        device: Device specification
            - None: Use default
            - 'auto': Use best available
            - 'cpu': Use CPU
            - 'cuda': Use default CUDA device
            - 'cuda:X': Use CUDA device X
            - 'mps': Use Apple Metal Performance Shaders
            - torch.device: Use as-is
        dtype: Working dtype; float64 never resolves to MPS

    Returns:
        Parsed device
    """
    if device is None or device == 'auto':
        return get_default_device(dtype)

    if isinstance(device, torch.device):
        return device

    if isinstance(device, str):
        if device == 'cpu':
            return torch.device('cpu')
        elif device.startswith('cuda'):
            if not torch.cuda.is_available():
                warnings.warn("CUDA not available, falling back to CPU")
                return torch.device('cpu')
            return torch.device(device)
        elif device == 'mps':
            if not _mps_available():
                warnings.warn("MPS not available, falling back to CPU")
                return torch.device('cpu')
            if dtype == torch.float64:
                warnings.warn("MPS does not support float64, falling back to CPU")
                return torch.device('cpu')
            return torch.device('mps')
        else:
            raise ValueError(f"Unknown device: {device}")
    else:
        raise TypeError(f"Device must be str or torch.device, got {type(device)}")


def get_batch_size(n_samples: int, n_features: int, n_clusters: int,
                   dtype: torch.dtype = torch.float64,
                   target_memory_mb: float = 256) -> int:
    """Number of samples per assignment chunk.

    The assignment step materializes an (batch, K, d) difference tensor, so
    the chunk is sized against that.

    Args:
        n_samples: Total number of samples
        n_features: Number of features
        n_clusters: Number of centroids
        dtype: Sample dtype
        target_memory_mb: Target memory usage in MB

    Returns:
        Recommended batch size
    """
    element_size = torch.empty((), dtype=dtype).element_size()
    bytes_per_sample = max(1, n_features * n_clusters) * element_size
    target_bytes = target_memory_mb * 1024 * 1024

    batch_size = int(target_bytes / bytes_per_sample)
    batch_size = max(1, min(batch_size, n_samples))

    # Round to nice number
    if batch_size > 1000:
        batch_size = (batch_size // 1000) * 1000
    elif batch_size > 100:
        batch_size = (batch_size // 100) * 100

    return batch_size
