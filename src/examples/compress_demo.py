"""
Demo of palette reduction with K-means.

This example shows how to:
1. Build a synthetic RGBA gradient image (or load one from the command line)
2. Reduce it to several palette sizes
3. Visualize the palettes and the clustered colors
"""

import sys

import numpy as np
import matplotlib.pyplot as plt

from colorquant import quantize_pixels, load_pixels, plot_palette, plot_colors_3d
from colorquant.image import extract_samples


def generate_gradient_image(width=160, height=120):
    """Smooth red/green gradient with a blue disc and a semi-transparent band."""
    y, x = np.mgrid[0:height, 0:width]

    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[..., 0] = (255 * x / (width - 1)).astype(np.uint8)
    image[..., 1] = (255 * y / (height - 1)).astype(np.uint8)

    disc = (x - width / 2) ** 2 + (y - height / 2) ** 2 < (min(width, height) / 4) ** 2
    image[disc, 2] = 220

    image[..., 3] = 255
    image[height // 3:height // 3 + 10, :, 3] = 128
    return image


def main():
    """Run the demo."""
    print("=== Palette Reduction Demo ===\n")

    if len(sys.argv) > 1:
        print(f"Loading {sys.argv[1]}...")
        pixels = load_pixels(sys.argv[1])
    else:
        print("Generating synthetic gradient image...")
        pixels = generate_gradient_image()
    print(f"Image shape: {pixels.shape}\n")

    color_counts = [2, 4, 8, 16]
    results = []
    for n_colors in color_counts:
        result = quantize_pixels(pixels, n_colors, random_state=42)
        results.append(result)

        distinct = len(np.unique(result.pixels[..., :3].reshape(-1, 3), axis=0))
        alpha_kept = np.array_equal(result.pixels[..., 3], pixels[..., 3])
        print(f"{n_colors:3d} colors: {result.n_iter:3d} iterations, "
              f"status = {result.status.value}, "
              f"distinct output colors = {distinct}, alpha preserved = {alpha_kept}")

    # Visualize results
    print("\nPlotting results...")
    fig, axes = plt.subplots(len(color_counts) + 1, 2, figsize=(12, 3 * (len(color_counts) + 1)))
    axes[0, 0].imshow(pixels)
    axes[0, 0].set_title('Original')
    axes[0, 0].axis('off')
    axes[0, 1].axis('off')

    for row, (n_colors, result) in enumerate(zip(color_counts, results), start=1):
        axes[row, 0].imshow(result.pixels)
        axes[row, 0].set_title(f'{n_colors} colors')
        axes[row, 0].axis('off')
        plot_palette(result.palette, result.counts, ax=axes[row, 1])

    plt.tight_layout()

    largest = results[-1]
    plot_colors_3d(extract_samples(pixels), largest.labels, largest.centers,
                   title=f'RGB clusters ({color_counts[-1]} colors)')
    plt.show()


if __name__ == "__main__":
    main()
