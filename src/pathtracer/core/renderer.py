"""Per-pixel sampling loop.

For every pixel the renderer averages ``samples_per_pixel`` primary rays,
each jittered uniformly inside the pixel's footprint:

    u = (i + xi_u) / (width - 1)
    v = (j + xi_v) / (height - 1)

Pixels are rendered in parallel; the samples of one pixel are summed in a
fixed order from a generator seeded by ``(seed, pixel index)``, so a render
is reproducible for a given seed.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.config import RenderSettings
    >>> from pathtracer.core.renderer import Renderer
    >>> from pathtracer.scene.presets import create_three_spheres_scene
    >>>
    >>> settings = RenderSettings(image_width=200, samples_per_pixel=10)
    >>> image = Renderer(settings).render(create_three_spheres_scene())
    >>> image.shape
    (112, 200, 3)
"""

from collections.abc import Callable

import numpy as np
import numpy.typing as npt
import taichi as ti

from pathtracer.camera.camera import Camera, get_ray, setup_camera
from pathtracer.config import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH, RenderSettings
from pathtracer.core.integrator import ray_color
from pathtracer.core.sampler import random_f32, seed_state
from pathtracer.core.vec3 import vec3
from pathtracer.scene.hittable_list import HittableList

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Preallocated to the maximum size to avoid kernel recompilation
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


@ti.func
def sample_pixel(
    i: ti.i32,
    j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    max_depth: ti.i32,
    seed: ti.u32,
) -> vec3:
    """Average of jittered samples for pixel (i, j); j = 0 is the bottom row."""
    state = seed_state(seed, j * width + i)
    pixel_color = vec3(0.0, 0.0, 0.0)

    # A one-pixel dimension spans the whole viewport
    u_scale = 1.0 / ti.max(ti.cast(width - 1, ti.f32), 1.0)
    v_scale = 1.0 / ti.max(ti.cast(height - 1, ti.f32), 1.0)

    for _ in range(samples):
        jitter_u, state = random_f32(state)
        jitter_v, state = random_f32(state)
        u = (ti.cast(i, ti.f32) + jitter_u) * u_scale
        v = (ti.cast(j, ti.f32) + jitter_v) * v_scale
        sample, state = ray_color(get_ray(u, v), max_depth, state)
        pixel_color += sample

    return pixel_color / ti.cast(samples, ti.f32)


@ti.kernel
def _render_rows(
    width: ti.i32,
    height: ti.i32,
    row_start: ti.i32,
    row_end: ti.i32,
    samples: ti.i32,
    max_depth: ti.i32,
    seed: ti.u32,
):
    """Render rows [row_start, row_end) into the color buffer."""
    for i, j in ti.ndrange(width, (row_start, row_end)):
        _color_buffer[i, j] = sample_pixel(i, j, width, height, samples, max_depth, seed)


@ti.kernel
def _render_single_pixel(
    i: ti.i32,
    j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    max_depth: ti.i32,
    seed: ti.u32,
) -> vec3:
    """Render one pixel without touching the color buffer."""
    return sample_pixel(i, j, width, height, samples, max_depth, seed)


# =============================================================================
# Public Rendering API
# =============================================================================


class Renderer:
    """Renders a scene into a linear float image.

    Attributes:
        settings: The render configuration.
    """

    def __init__(self, settings: RenderSettings) -> None:
        self.settings = settings

    @property
    def width(self) -> int:
        return self.settings.image_width

    @property
    def height(self) -> int:
        return self.settings.image_height

    def prepare(self, world: HittableList, camera: Camera | None = None) -> None:
        """Upload the scene and camera.

        Args:
            world: The scene to render.
            camera: Camera to render through; defaults to the one built
                from the settings.
        """
        world.upload()
        setup_camera(camera if camera is not None else self.settings.make_camera())

    def render(
        self,
        world: HittableList,
        camera: Camera | None = None,
        *,
        rows_per_batch: int = 16,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.float32]:
        """Render the full image.

        Args:
            world: The scene to render.
            camera: Camera to render through; defaults to the one built
                from the settings.
            rows_per_batch: Rows rendered between progress callbacks.
            callback: Optional callable receiving (rows_done, total_rows)
                after each batch.

        Returns:
            Averaged linear colors of shape (height, width, 3), rows ordered
            top to bottom.

        Raises:
            ValueError: If rows_per_batch is not positive.
        """
        if rows_per_batch < 1:
            raise ValueError(f"rows_per_batch must be positive, got {rows_per_batch}")

        self.prepare(world, camera)
        s = self.settings
        width, height = self.width, self.height

        # Render from the top row down so progress tracks the output order
        rows_done = 0
        row_end = height
        while row_end > 0:
            row_start = max(0, row_end - rows_per_batch)
            _render_rows(
                width, height, row_start, row_end, s.samples_per_pixel, s.max_depth, s.seed
            )
            rows_done += row_end - row_start
            row_end = row_start
            if callback is not None:
                callback(rows_done, height)

        return self._image_numpy()

    def render_pixel(self, i: int, j: int) -> tuple[float, float, float]:
        """Render one pixel of the already prepared scene.

        Args:
            i: Column, 0 = left.
            j: Row, 0 = bottom.

        Returns:
            Tuple of (R, G, B) averaged linear color.

        Raises:
            IndexError: If (i, j) is outside the image.
        """
        if not (0 <= i < self.width and 0 <= j < self.height):
            raise IndexError(f"Pixel ({i}, {j}) outside {self.width}x{self.height} image")
        s = self.settings
        result = _render_single_pixel(
            i, j, self.width, self.height, s.samples_per_pixel, s.max_depth, s.seed
        )
        return (float(result[0]), float(result[1]), float(result[2]))

    def _image_numpy(self) -> npt.NDArray[np.float32]:
        full_image = _color_buffer.to_numpy()

        # Active region, (width, height, 3) -> (height, width, 3)
        image = np.transpose(full_image[: self.width, : self.height, :], (1, 0, 2))

        # Buffer row 0 is the bottom of the image
        return np.ascontiguousarray(np.flipud(image), dtype=np.float32)

    def __repr__(self) -> str:
        s = self.settings
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples={s.samples_per_pixel}, max_depth={s.max_depth})"
        )
