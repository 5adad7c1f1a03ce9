"""
Image adapter between pixel buffers and the clustering core.

Pixel buffers are row-major ``(height, width, channels)`` uint8 arrays. The
first three channels are the color channels that get clustered; any further
channel (usually alpha) passes through untouched.
"""

from dataclasses import dataclass
from typing import Optional, Union
import numpy as np
import torch
from torch import Tensor

from ..algorithms.kmeans import KMeans
from ..base.data_structures import FitStatus
from ..base.exceptions import InvalidInputError

COLOR_CHANNELS = 3
MIN_COLORS = 2
MAX_COLORS = 256


@dataclass
class QuantizationResult:
    """Output of a palette reduction."""

    pixels: np.ndarray        # (H, W, C) uint8, same shape as the input
    palette: np.ndarray       # (K, 3) uint8 rounded centroids
    centers: Tensor           # (K, 3) unrounded centroids
    labels: np.ndarray        # (H, W) palette index per pixel
    counts: np.ndarray        # (K,) pixels per palette entry
    n_iter: int
    status: FitStatus

    @property
    def n_colors(self) -> int:
        return self.palette.shape[0]

    @property
    def converged(self) -> bool:
        return self.status is FitStatus.CONVERGED


def check_n_colors(n_colors: int) -> int:
    """Validate a user supplied color count against the supported range [2, 256]."""
    if isinstance(n_colors, bool) or not isinstance(n_colors, (int, np.integer)):
        raise InvalidInputError(f"Number of colors must be an integer, got {n_colors!r}")
    if not MIN_COLORS <= n_colors <= MAX_COLORS:
        raise InvalidInputError(f"Number of colors must be between {MIN_COLORS} "
                                f"and {MAX_COLORS}, got {n_colors}")
    return int(n_colors)


def as_pixel_array(buffer: Union[np.ndarray, bytes, list], width: int, height: int,
                   channels: int = 4) -> np.ndarray:
    """View a flat row-major buffer as an ``(height, width, channels)`` array."""
    pixels = np.asarray(bytearray(buffer) if isinstance(buffer, bytes) else buffer,
                        dtype=np.uint8)
    expected = width * height * channels
    if pixels.size != expected:
        raise InvalidInputError(f"Buffer has {pixels.size} values, expected "
                                f"{width}x{height}x{channels}={expected}")
    return pixels.reshape(height, width, channels)


def _check_pixels(pixels: np.ndarray) -> np.ndarray:
    pixels = np.asarray(pixels)
    if pixels.ndim != 3:
        raise InvalidInputError(f"Expected (height, width, channels) pixels, got shape {pixels.shape}")
    if pixels.shape[2] < COLOR_CHANNELS:
        raise InvalidInputError(f"Expected at least {COLOR_CHANNELS} channels, got {pixels.shape[2]}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise InvalidInputError("Image has no pixels")
    return pixels


def extract_samples(pixels: np.ndarray, dtype: torch.dtype = torch.float64) -> Tensor:
    """Flatten the color channels of a pixel buffer to an (H*W, 3) sample tensor."""
    pixels = _check_pixels(pixels)
    colors = np.ascontiguousarray(pixels[..., :COLOR_CHANNELS]).reshape(-1, COLOR_CHANNELS)
    return torch.from_numpy(colors.astype(np.float64)).to(dtype)


def round_palette(centers: Tensor) -> np.ndarray:
    """Round centroids half-up and clamp them to valid 8-bit channel values."""
    rounded = torch.floor(centers.detach().to('cpu', torch.float64) + 0.5)
    return rounded.clamp(0, 255).numpy().astype(np.uint8)


def reconstruct(pixels: np.ndarray, labels: Union[Tensor, np.ndarray],
                centers: Tensor) -> np.ndarray:
    """Replace each pixel's color channels by its rounded centroid.

    Non-color channels are copied from ``pixels`` unchanged.
    """
    pixels = _check_pixels(pixels)
    height, width = pixels.shape[:2]

    if isinstance(labels, Tensor):
        labels = labels.detach().cpu().numpy()
    labels = np.asarray(labels).reshape(-1)
    if labels.size != height * width:
        raise InvalidInputError(f"Got {labels.size} labels for {height * width} pixels")

    palette = round_palette(centers)
    output = np.array(pixels, dtype=np.uint8, copy=True)
    output[..., :COLOR_CHANNELS] = palette[labels].reshape(height, width, COLOR_CHANNELS)
    return output


def quantize_pixels(pixels: np.ndarray, n_colors: int,
                    max_iter: int = 100,
                    random_state: Optional[Union[int, torch.Generator]] = None,
                    verbose: int = 0,
                    device: Optional[Union[str, torch.device]] = None,
                    **kmeans_kwargs) -> QuantizationResult:
    """Reduce the palette of a pixel buffer to ``n_colors`` colors.

    Args:
        pixels: (H, W, C) uint8 buffer, C >= 3
        n_colors: Number of palette entries (the core only needs >= 1)
        max_iter: Iteration cap for the K-means fit
        random_state: Seed or generator for reproducible palettes
        verbose: K-means verbosity level
        device: Torch device for the fit
        **kmeans_kwargs: Forwarded to :class:`KMeans`

    Returns:
        QuantizationResult with the output buffer and palette
    """
    pixels = _check_pixels(pixels)
    height, width = pixels.shape[:2]
    samples = extract_samples(pixels)

    kmeans = KMeans(n_clusters=n_colors, max_iter=max_iter, random_state=random_state,
                    verbose=verbose, device=device, **kmeans_kwargs)
    kmeans.fit(samples)

    centers = kmeans.cluster_centers_.cpu()
    labels = kmeans.labels_.cpu()

    return QuantizationResult(
        pixels=reconstruct(pixels, labels, centers),
        palette=round_palette(centers),
        centers=centers,
        labels=labels.numpy().reshape(height, width),
        counts=torch.bincount(labels, minlength=n_colors).numpy(),
        n_iter=kmeans.n_iter_,
        status=kmeans.status_
    )


def side_by_side(original: np.ndarray, compressed: np.ndarray) -> np.ndarray:
    """Comparison image with the original on the left and the compressed image on the right."""
    original = _check_pixels(original)
    compressed = _check_pixels(compressed)
    if original.shape != compressed.shape:
        raise InvalidInputError(f"Cannot compare images of shape {original.shape} "
                                f"and {compressed.shape}")
    return np.concatenate([original, compressed], axis=1)
