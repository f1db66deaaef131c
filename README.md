# seiscoherence

Tools for working with 3-D seismic volumes and the coherence volumes made
from them: cutting slices and sub-cubes out of a volume, generating layer
point files, gridding per-point layer results into 2-D sections, building
analysis windows around samples, and trace utilities (automatic gain
control, Butterworth band-pass, trace interpolation, Gaussian smoothing).

## Installation

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Data layout

Volumes are raw binary files of 32-bit floats with no header. Samples are
stored with `y` slowest, then `x`, with time (`t`, or `z`) fastest:
index = `iy * nx * nt + ix * nt + it`. Read as arrays they have shape
`(ny, nx, nt)`.

Text files:

* layer file: the first line holds the number of points, then one
  `ix,iy,it` line per point;
* layer result file: one `ix,iy,it,value` line per point.

## Commands

Every command takes its parameters as `name=value` arguments. An argument
`par=file` reads further `name=value` words from a file, where `#` starts a
comment; later values override earlier ones. Run a command without
arguments to print its parameter list. On a bad parameter, a missing file or
an out-of-range cut the command logs the error and returns 1.

### se-coherence-cut-slice

```
se-coherence-cut-slice coherence_cube_file=coh.bin nx=200 ny=150 nz=500 direction=2 cutpoint=250
```

| parameter | default | meaning |
|---|---|---|
| `coherence_cube_file` | `coherence_cube.bin` | input volume |
| `nx`, `ny`, `nz` | 100 | volume size |
| `direction` | 2 | axis cut across: 0 x, 1 y, 2 z (anything else is taken as z, with a warning) |
| `cutpoint` | 50 | index of the slice along that axis |

The slice is written as raw floats to
`<cube>_<nx>_<ny>_<nz>_<x|y|z>_<cutpoint>`. NaN values become 0.

### se-coherence-cut-cube

```
se-coherence-cut-cube coherence_cube_file=coh.bin nx=200 ny=150 nz=500 n1=50 n2=50 n3=100 no1=10 no2=20 no3=30
```

| parameter | default | meaning |
|---|---|---|
| `coherence_cube_file` | `coherence_cube.bin` | input volume |
| `nx`, `ny`, `nz` | 100 | volume size |
| `n1`, `n2`, `n3` | 10 | sub-cube size along x, y and z |
| `no1`, `no2`, `no3` | 0 | sub-cube offset along x, y and z |

The sub-cube is written, stored like the input, to
`<cube>_<nx>_<ny>_<nz>_<n1>_<n2>_<n3>_o_<no1>_<no2>_<no3>`. A sub-cube that
reaches past the volume is an error.

### se-layer-generator

```
se-layer-generator nx=200 ny=150 nt=500 direction=2 cut_point=250 layer_fname=layer.txt
```

| parameter | default | meaning |
|---|---|---|
| `nx`, `ny`, `nt` | 100 | volume size |
| `direction` | 2 | axis cut across: 0 x, 1 y, 2 t |
| `cut_point` | 50 | index of the plane along that axis |
| `layer_fname` | `layer.txt` | output layer file |

Writes a layer file holding every point of one plane of the grid.

### se-interpolation-2d

```
se-interpolation-2d n1=200 n2=150 axis1=1 axis2=2 layer_fname=layer_result.txt layer_interplatation_fname=section.bin
```

| parameter | default | meaning |
|---|---|---|
| `n1`, `n2` | 100 | grid size |
| `axis1`, `axis2` | 1, 2 | point coordinates (1 x, 2 y, 3 t) used as row and column |
| `layer_fname` | `layer.txt` | input layer result file |
| `layer_interplatation_fname` | `layer_interplatation.bin` | output grid |

Reads `n1 * n2` lines of a layer result file, places each value on an
`n1 x n2` grid and writes it as raw floats. Fewer lines than that, or a point
outside the grid, is an error.

## Library use

* `seiscoherence.cut` — `read_cube`, `cut_slice`, `cut_cube`,
  `slice_file_name`, `cube_file_name`, `Direction`, and the commands
  `slice_main`, `cube_main`;
* `seiscoherence.layers` — `layer_points`, `write_layer_file`,
  `grid_layer_result`, and the commands `generator_main`,
  `interpolation_main`;
* `seiscoherence.params` — `parse_args` (the `name=value` / `par=file`
  reader), `param` (typed lookup with a default) and `ParameterError`;
* `seiscoherence.subcube` — `CoherenceType`, `Subcube` (`Subcube.around`
  builds the window of traces around a sample, `Subcube.gather` reads its
  traces from a volume as a `(traces, window_t)` array), `build_subcubes`,
  `grid_points`, `read_layer_points`;
* `seiscoherence.mathutils` — `gaussian_filter_1d`, `gaussian_filter_3d`
  (separable Gaussian smoothing, optionally followed by a gradient),
  `rand_int`, `rand_float`;
* `seiscoherence.agc.Agc` — automatic gain control; `Agc.apply` returns the
  gained trace;
* `seiscoherence.bandpass.Bandpass` — zero-phase (`phase` false) or
  minimum-phase Butterworth low-cut/high-cut filter; `Bandpass.apply(data,
  nsamples, ntraces)` returns a filtered copy;
* `seiscoherence.interpolation` — `TraceInterpolator` (resamples traces given
  at irregular positions onto a regular axis with 9th-order polynomial and
  Lagrange operators), `poly9fit`, `interp1_irregular`, `check_coeff`;
* `seiscoherence.velocity.VelocityConfig` — velocity model settings read
  from a `name -> value` mapping (`vel` is required).

```python
from seiscoherence.cut import Direction, cut_slice, read_cube
from seiscoherence.subcube import Subcube

volume = read_cube("coh.bin", nx=200, ny=150, nz=500)
time_slice = cut_slice(volume, Direction.Z, 250)      # shape (200, 150)

window = Subcube.around(10, 20, 100, 200, 150, 500, 3, 3, 21, 11, 0, 10.0, 10.0, 0.004)
traces = window.gather(volume)                        # shape (9, 21)
```

## What this package does not do

It does not compute coherence attributes: there are no semblance, variance
or eigenstructure measures, no dip scanning, and no command that turns a
seismic volume into a coherence volume. The analysis windows of
`seiscoherence.subcube` and the layer files of `seiscoherence.layers` are
the inputs such a computation would use, and the cutting and gridding
commands work on coherence volumes and layer results produced elsewhere.