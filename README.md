# tlasca

tlasca computes a temporal laser speckle contrast (tLASCA) map from a
sequence of numbered PNG frames. Each output pixel shows how much the
intensity in a small window changes over time. Bright pixels mark
regions of high temporal variability.

## How it works

Each frame is first converted to 8-bit grayscale. Colours are weighted
by luminance and premultiplied by alpha, so fully transparent pixels
become black. 16-bit grayscale frames keep their high byte.

For every pixel, tlasca collects its intensity across all frames. It
then computes the temporal mean and the sample standard deviation, with
N − 1 in the denominator. The pixel's contrast is `std / mean`. A pixel
whose mean is zero has a contrast of zero.

For every position of a square window of `window_size` × `window_size`
pixels, the contrast is averaged over the window. The averages are
scaled by 255, capped at 255 and written as an 8-bit grayscale PNG. The
output is `window_size − 1` pixels smaller than the input in each
direction.

These conditions raise `ValueError`:

* fewer than two frames;
* a window size below 1;
* a window larger than the frames.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Usage

1. Put your frames in a directory. Each frame must be named by its
   number: `1.png`, `2.png`, …, `10.png`. The files are processed in
   numeric order, so `10.png` comes after `2.png`. Only files ending in
   `.png` are picked up.
2. Run the command:

```
tlasca
```

By default it reads its settings from `go-tlasca.json` in the current
directory. Use `--config` to name another file:

```
tlasca --config path/to/settings.json
```

The command logs its progress to standard output, with lines prefixed
by `[GO-TLASCA]` and a timestamp. It exits with status 0 on success. If
something goes wrong, it logs `application failed: …` and exits with
status 1. Examples of failures:

* the data directory does not exist;
* it holds no PNG files;
* a file name is not a number;
* an image cannot be read;
* the settings file exists but cannot be read or parsed.

The results directory is created if needed.

## Configuration

If the settings file is missing, tlasca logs a warning and uses the
defaults.

```json
{
  "paths": {
    "data_dir": "data",
    "results_dir": "results",
    "output_filename": "result.png"
  },
  "algorithm": {
    "window_size": 1
  }
}
```

The values above are the defaults. A key that is missing or set to
`null` keeps its default. Key names are matched without regard to case.
If a value has the wrong type, for example a string for `window_size`,
loading fails with `ValueError`.

| key | meaning |
| --- | --- |
| `paths.data_dir` | directory holding the input frames |
| `paths.results_dir` | directory the result is written to |
| `paths.output_filename` | file name of the contrast map |
| `algorithm.window_size` | side of the square averaging window; `1` means no spatial averaging |

## Library use

```python
import logging

from tlasca.config import load_config
from tlasca.contrast import Runner, contrast_map
from tlasca.cli import sort_by_number, load_and_process_images
from tlasca.imageutils import save_image

logger = logging.getLogger("tlasca")
config = load_config("go-tlasca.json", logger)

paths = sort_by_number(["data/2.png", "data/10.png", "data/1.png"])
frames = load_and_process_images(paths)

result = Runner(config, logger).run(frames)
save_image("results/result.png", result)
```

The modules are:

* `tlasca.config`: the frozen dataclasses `Config`, `PathsConfig` and
  `AlgorithmConfig`, and `load_config(path, logger=None)`.
* `tlasca.imageutils`: the following functions.
  * `extract_number(filename)` reads the frame number from a name such
    as `dir/10.png`.
  * `load_image(filename)` decodes a PNG file into a Pillow image.
  * `convert_to_gray(img)` returns a `uint8` array of shape
    (height, width).
  * `save_image(filename, array)` writes a 2-D array as PNG.
* `tlasca.contrast`: the following.
  * `temporal_window_contrast(images, x, y, window_size)` returns the
    averaged contrast of one window. Pixels outside the frames count as
    zero.
  * `contrast_map(images, window_size)` returns the full 8-bit map.
  * `Runner(config, logger=None)` has a `run(gray_images)` method.
* `tlasca.cli`: the following.
  * `sort_by_number(paths)` sorts paths by frame number and keeps ties
    in their order.
  * `load_and_process_images(paths)` loads and converts each image.
    It raises `RuntimeError` on the first file that fails.
  * `run(logger=None, config_path="go-tlasca.json")` performs the whole
    job and returns the path of the written image.
  * `main(argv=None)` is the command.