# ibomscope

Building blocks for inspecting and assembling printed circuit boards under a
microscope camera, working from interactive BOM data. The package holds the
state and logic an inspection front end needs: measurements, a guided
placement workflow, snapshots, stencil alignment scoring, barcode matching,
voice commands, a WebSocket frame stream and the models behind the panels.

## Modules

- `ibomscope.measurement`: `Measurement` collects points and produces
  `MeasureResult`s for the modes in `Mode` (`DISTANCE`, `ANGLE`, `AREA`,
  `PIN_PITCH`). Distance and pitch complete at two points, angle at three;
  area is read with `current_result()`. With `set_calibration()` results also
  carry millimetres (square millimetres for area). The helpers `distance()`,
  `angle()` and `polygon_area()` can be used on their own.
- `ibomscope.pick_and_place`: `PickAndPlace` turns a component list into
  `PlacementStep`s, grouped by value by default. Steps can also be put back
  into their recorded order (`sort_by_position()`) or sorted by footprint
  name length (`sort_by_footprint_size()`). The workflow supports
  `mark_placed()`, `skip()`, `go_back()` and `reset()`.
- `ibomscope.snapshot_history`: `SnapshotHistory` keeps Pillow images most
  recent first. Once `set_storage_dir()` is called it saves each one as a PNG
  named by `safe_filename()`. Snapshots take notes, can be looked up by
  component, exported and deleted; deleting also removes the file.
- `ibomscope.stencil_align`: `StencilAlign` matches detected mark centres to
  the expected fiducials with `find_nearest()`. It scores the result with
  `alignment_quality()`, `max_error()` and `is_aligned()`, and
  `draw_alignment_overlay()` draws the markers onto a copy of an image.
- `ibomscope.barcode`: `BarcodeScanner` runs a decoder you supply over a
  grayscale copy of the frame, for the enabled formats. It returns
  `ScanResult`s with bounding boxes, and `scan_for_component()` matches the
  decoded text to known references, exact matches first, then substrings.
- `ibomscope.voice_control`: `VoiceControl` takes 16-bit mono PCM through
  `feed_audio()` and skips audio whose `calculate_rms()` level is below the
  threshold. It buffers about a second of voiced audio and passes it to the
  `recognizer` callable. Registered keywords found in the text run their
  callbacks.
- `ibomscope.remote_view`: `RemoteView` is an asyncio WebSocket server
  (`await start(port)`, `await stop()`). It sends the latest pushed frame as
  JPEG, at most 1280 px wide, throttled to `set_max_fps()`. Clients may send
  `GET_HTML`, which returns `viewer_html()`, or `GET_STATUS`, which returns a
  small JSON object. `push_status()` sends a text to every client.
- `ibomscope.stats`: `InspectionStats` counts placed, missing and defective
  components against a total. It reports pending, progress percent and a
  yield summary, keeps a time-stamped `DefectEntry` log and formats the
  performance readouts.
- `ibomscope.bom_table`: `BomTable` holds `BomRow`s with a text and layer
  filter, per-component state, check marks and the checked references.
- `ibomscope.inspection_wizard`: `InspectionWizard` steps through `Step`
  (select components, align, inspect, results). It records
  `InspectionResult`s and tracks progress and the button labels and states.
- `ibomscope.camera_view`: `ViewTransform` fits a frame to a widget. It
  handles zoom (0.1 to 20), panning and wheel zoom toward the cursor, and
  maps between widget and image coordinates.
- `ibomscope.control_panel`: `ControlSettings` holds the overlay, detection
  and camera control values within their allowed ranges.
  `camera_device_labels()` numbers device names.
- `ibomscope.theme`: `Color`, the status and overlay colours,
  `state_color()` and `status_css()`.
- `ibomscope.signals`: `Signal`, a small connect/emit mechanism. Every class
  above announces its changes through it.

Components given to `PickAndPlace.load_components()` and `BomTable.load()`
can be any objects with `reference`, `value`, `footprint` and `layer`
attributes. `layer` is a `Layer` or `"F"`/`"B"`.

## Installation

```
pip install ibomscope
```

## Examples

```python
from ibomscope.measurement import Measurement, Mode

m = Measurement()
m.set_calibration(20.0)  # pixels per mm
m.set_mode(Mode.DISTANCE)
m.measurement_complete.connect(lambda r: print(r.value_pixels, r.value_mm))
m.add_point((0.0, 0.0))
m.add_point((30.0, 40.0))  # prints 50.0 2.5
```

```python
from types import SimpleNamespace
from ibomscope.pick_and_place import PickAndPlace

components = [
    SimpleNamespace(reference="C2", value="100nF", footprint="C_0402", layer="F"),
    SimpleNamespace(reference="R1", value="10k", footprint="R_0603", layer="F"),
    SimpleNamespace(reference="C1", value="100nF", footprint="C_0402", layer="B"),
]

pnp = PickAndPlace()
pnp.load_components(components)
while not pnp.is_complete():
    step = pnp.current_step()
    print("place", step.reference, step.value)  # C1, C2, then R1
    pnp.mark_placed()
```

```python
import asyncio
from ibomscope.remote_view import RemoteView

async def serve(frames):
    view = RemoteView()
    if not await view.start(8080):
        return
    try:
        async for image in frames:  # Pillow images
            view.push_frame(image)
    finally:
        await view.stop()
```

## What the package does not do

- It has no graphical interface and no command-line program. The classes are
  models for a front end to display.
- It does not capture from cameras or microphones. Frames and audio are
  passed in by the caller.
- It does not find fiducial marks in images. `StencilAlign.detect_fiducials()`
  takes candidate centres that were detected elsewhere.
- It ships no barcode decoder and no speech recogniser. `BarcodeScanner`
  finds nothing without a decoder, and `VoiceControl` runs no commands
  without a `recognizer`.
- It does not read interactive BOM files, and it does not persist settings.

## Tests

```
pip install "ibomscope[test]"
pytest
```