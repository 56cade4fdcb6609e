# midgarts

Readers for Ragnarok Online client data files, and the character animation
logic that turns a character's sprites into a list of draw commands.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## File formats

- **GRF archives**, `midgarts.fileformat.grf.archive`: `load(path)` opens a
  version 0x200 archive and returns a `GrfFile`. `get_entry(name)` reads and
  decodes one entry (zlib-compressed, header-encrypted or fully encrypted);
  `get_entries(directory)` lists the entries of a directory;
  `get_action_and_sprite_files(name)` loads `<name>.act` and `<name>.spr`
  together as an `ActionSpriteFilePair`. Names are matched case-insensitively
  and a missing directory or entry raises `EntryNotFoundError`. A `GrfFile` is
  a context manager and closes its file on exit.
- **Entries and the directory tree**, `midgarts.fileformat.grf.entry` and
  `midgarts.fileformat.grf.tree`: `Entry`, `EntryHeader`, `decompress`, and the
  binary search tree `EntryTree` of directory names.
- **Entry decryption**, `midgarts.fileformat.des`: `decode_full` and
  `decode_header`.
- **ACT** action files, `midgarts.fileformat.act`: `load(data)` returns an
  `ActionFile` with its actions, frames, layers, anchor positions and sounds.
- **SPR** sprite files, `midgarts.fileformat.spr`: `load(data)` returns a
  `SpriteFile` holding paletted (plain or run-length encoded) and RGBA frames;
  `SpriteFile.image_at(index)` builds and caches a `UniqueRGBA` image
  (`midgarts.graphic.rgba`), backed by a numpy array.
- **GAT** ground altitude files, `midgarts.fileformat.gat`: cell heights and
  `CellType` flags.
- **GND** ground files, `midgarts.fileformat.gnd`: the header, the texture
  table and the light map header.

Malformed or truncated data raises `ValueError`.

## Usage

```python
from midgarts.fileformat.grf.archive import load

with load("data.grf") as grf:
    pair = grf.get_action_and_sprite_files("data/sprite/shadow")
    image = pair.spr.image_at(0)
    print(pair.act.actions[0].delay, image.get_pixel(0, 0))
```

## Characters

- `midgarts.character.types` holds the enumerations: `JobId`, `JobSpriteId`,
  `Direction`, `StateType`, `ActionIndex`, `ActionPlayMode`, `AttachmentType`
  and `Gender`, with `get_action_index`, `get_state_type`,
  `get_job_sprite_id`, `all_job_sprite_ids` and `attachments`.
- `midgarts.character.jobsprite` gives the client's sprite names for each job
  (`job_sprite_name`) and body sprite paths (`body_file_path`).
- `midgarts.entity.Character` is a `Transform` (`midgarts.graphic.transform`)
  carrying the state, render-timing and attachment components from
  `midgarts.component`; `set_state` records the previous state.
- `midgarts.component.new_character_attachment_component` loads a character's
  shadow, body, head and, when enabled, shield sprites from a GRF archive,
  raising `AttachmentLoadError` when one cannot be loaded.
- `midgarts.system.action.CharacterActionSystem` chooses each character's
  action index and restarts its animation when its state changes.
- `midgarts.system.render.CharacterRenderSystem` fills `render_commands` with
  one `SpriteRenderCommand` per sprite layer, in drawing order. Textures come
  from a `CachedTextureProvider`, which calls a factory you supply once per
  image (by default the image itself is used as the texture).

Both systems take an optional `clock` callable, so animation timing can be
driven by any time source.

`midgarts.camera.Camera` provides a perspective projection matrix and a view
matrix as numpy arrays.

## What it does not do

The package has no window, no input handling and no graphics output: the
render system only produces `SpriteRenderCommand` values, and drawing them is
left to a renderer of your choice. There is no command-line program and no
archive browser; the package is used as a library.