# filepane

A library holding the model of a terminal file manager: directory
listings with sorting and hidden-file filtering, a per-tab cache of
visited directories, key binding trees, a parser for typed commands, and
TOML configuration for options, themes, previews and file openers.

Python 3.11 or newer is needed. There are no third-party dependencies.

## Modules

- `filepane.options`: `AppConfig`, `DisplayOption`, `SortOption`,
  `PreviewConfig` and `PreviewEntry`. Each configuration class has
  `from_dict`; `AppConfig` and `PreviewConfig` also have
  `load(file_name, directories)`, which reads the first matching file
  from a list of directories and falls back to the defaults when no file
  is found or it cannot be read or parsed (the problem is reported on
  standard error). Sort methods are `natural` (the default), `lexical`
  and `mtime`; `SortOption.sort_entries` orders a list of entries, with
  directories first unless turned off.
- `filepane.configfile`: `search_directories` and `read_toml`.
- `filepane.fs`: `DirList` reads a directory, filters and sorts it, and
  keeps its cursor (`index`) on the same name across `reload_contents`.
  It also offers `need_update`, `depreciate`, `selected_entries`,
  `selected_paths` and `curr_entry`. `DirEntry` (with `name`, `path`,
  `metadata`, `selected`) and `Metadata` describe each file.
- `filepane.history`: `DirectoryHistory`, a dict from `Path` to
  `DirList`, with `populate_to_root`, `create_or_soft_update`,
  `create_or_reload`, `reload`, `depreciate_all_entries` and
  `depreciate_entry`.
- `filepane.key_command`: `parse_command` turns text such as `cd ~/src`,
  `cursor_move_down 3`, `select --all=true *.txt` or
  `paste_files --overwrite=true` into a `KeyCommand`; bad input raises
  `AppError`.
- `filepane.keyparse`: `str_to_event`, `str_to_key` and `str_to_mouse`
  parse names such as `ctrl+t`, `alt+x`, `arrow_up`, `f5`, `q` and
  `scroll_down` into `Key` or `MouseEvent` values.
- `filepane.keymapping`: `KeyMapping` binds commands to single keys or key
  sequences; `insert` raises `ValueError` when a binding is ambiguous.
  `KeyMapping.default()` gives the built-in bindings, and `load` reads a
  keymap file with `[[mapcommand]]` tables.
- `filepane.mimetype`: `MimetypeRegistry.entries_for_ext` lists the
  `MimetypeEntry` programs for an extension; `MimetypeEntry.execute_with`
  runs one on a list of paths.
- `filepane.theme`: `AppTheme`, `AppStyle`, `RawStyle`, `Color`,
  `Modifier` and `str_to_color`, which accepts colour names, `#rgb`,
  `#rrggbb` and `rgb(r, g, b)`; anything else becomes `Color.RESET`.
- `filepane.context`: `TabContext` (tabs and the current index, with
  wrap-around `switch`), `LocalState` and `FileOp`.
- `filepane.commands`: `search_string_fwd`, `search_string_rev`,
  `search_glob_fwd` and `search_glob_rev` (wrapping searches from the
  cursor), `select_entries`, `str_to_mode`, `remove_files`, `rename_file`
  and `rename_append_parts`.
- `filepane.errors`: `AppError` with an `ErrorKind`, and `from_os_error`.

## Example

```python
from pathlib import Path

from filepane.commands import search_string_fwd
from filepane.fs import DirList
from filepane.key_command import parse_command
from filepane.options import AppConfig

config = AppConfig.load("config.toml", [Path.home() / ".config" / "filepane"])
listing = DirList(Path("."), config.display_options)
print([entry.name for entry in listing])

command = parse_command("cursor_move_down 3")
print(command)                      # cursor_move_down 3

index = search_string_fwd(listing, "readme")   # an index, or None
```

## What it does not do

There is no terminal interface, event loop or program to run. Parsed
`KeyCommand` values are data only; nothing here carries them out. There
is no background copy or move of files for a paste, no moving to the
trash, no bulk rename in an editor, no clipboard support, and no file
icons.

## Running the tests

    pip install -e ".[test]"
    pytest