# gsfselect

A full-screen, game-controller-driven browser for GSF and miniGSF music
files, made for a Linux handheld. It lists folders and tracks, shows a
track's tags while it plays, and hands playback to an external `playgsf`
executable, which it pauses, resumes, stops and switches to bass mode by
sending signals to the child process.

## Installing

```
pip install .
```

pygame is used for the window, the font and the game controller.

## Running

```
gsfselect [--root DIR] [--app-dir DIR] [--player PATH] [--font PATH]
```

- `--root`: top music directory (default `/mnt/SDCARD/Music/GBA`).
- `--app-dir`: directory holding `state.txt`, `DejaVuSans.ttf` and the
  `playgsf` executable (default `/mnt/SDCARD/Apps/PlayGSF`).
- `--player`: player executable; defaults to `playgsf` in the app directory.
- `--font`: TrueType font; defaults to `DejaVuSans.ttf` in the app directory.

The selector opens the music root, or the folder and entry remembered in
`state.txt` from the last session, and writes its position and the bass
setting back there on exit. The playback screen shows the battery level
read from the device's sysfs file once a second.

### Controls

In the list:

- D-pad up/down: move one entry
- L1/R1: jump ten entries
- D-pad left/right: previous/next track
- B: open a folder or play a track
- A: go up one folder (not above the music root)
- Select: exit
- Menu: turn the screen (framebuffer and backlight) off and on

During playback:

- A: stop and go back to the list
- D-pad left/right, L2/R2: previous/next track
- X: cycle loop mode (ALL, OFF, ONE)
- Y: toggle bass mode
- Start: pause/resume
- Select: exit
- Menu: turn the screen off and on

With loop mode ALL the next track starts when one ends, ONE repeats the
track, and OFF returns to the list.

## Library use

The modules also work on their own:

- `gsfselect.psftag`: `read_tag` returns the `[TAG]` text of a GSF file
  (raising `PsfTagError` for unreadable or non-GSF files), `parse_tag` and
  `get_var` look up its variables, and `is_valid_gsf` checks a header.
- `gsfselect.titlefmt`: `format_title` and `file_title` build titles from
  a format such as `%game% - %title%`; `%file%` gives the file name.
- `gsfselect.library`: `list_directory`, `read_metadata`,
  `total_track_seconds`, `parse_length`, `parse_time_string` and
  `find_next_track`.
- `gsfselect.state`: `SavedState`, `load_state`, `save_state` and
  `state_file_path`.
- `gsfselect.player`: `PlayerProcess` starts and signals the player child.
- `gsfselect.selector`: the `Selector` state machine behind the screen,
  driven by `Button` presses, `triggers()` and `tick()`.
- `gsfselect.app`: `Renderer` draws the list and playback screens;
  `main` is the `gsfselect` command.
- `gsfselect.device`: battery level, backlight brightness and framebuffer
  blanking for the handheld.
- `gsfselect.memory`: `MemoryMap`, a GBA address space with the CPU's
  read and word-write rules.
- `gsfselect.interp`: `Interpolator`, `blend32` and `diff32` for weighted
  pixel blending and colour difference tests.
- `gsfselect.byteorder`: byte swapping and little-endian buffer access.

## What it does not do

gsfselect does not decode or play GSF music itself. Playback needs a
separate `playgsf` executable that accepts `-s -q [-b] FILE` and reacts
to `SIGSTOP`, `SIGCONT`, `SIGTERM` and `SIGUSR2`. `MemoryMap` models
memory access only; there is no CPU or sound emulation in the package.

## Tests

```
pip install .[test]
pytest
```