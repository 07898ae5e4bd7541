# dotstate

Building blocks for a dotfile manager: typed slash-separated paths,
serialization formats, persistent key/value state, encryption back ends,
glob pattern sets with `**`, and pluggable filesystem "systems".

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `dotstate.paths` – `AbsPath` and `RelPath`, `str` subclasses with `base`,
  `dir`, `join`, `split` and `trim_dir_prefix` (`RelPath` also has
  `has_dir_prefix`). `trim_dir_prefix` raises `NotInAbsDirError` or
  `NotInRelDirError` when the path is not inside the directory.
  `new_abs_path` rejects relative paths with `ValueError`;
  `new_abs_path_from_ext_path` expands a leading `~` and makes a path
  absolute; `AbsPath.parse` does the same against the user's home directory;
  `normalize_path`, `home_dir_abs_path`, `expand_tilde`, `volume_name_len`
  and `volume_name_to_upper` are also available.
- `dotstate.formats` – `JSONFormat` (indented by two spaces, with a trailing
  newline), `TOMLFormat` and `YAMLFormat`, each with `marshal(value) -> bytes`
  and `unmarshal(data)`, collected by name in `FORMATS`. `HexBytes` is a
  `bytes` subclass that serializes as a lowercase hex string
  (`to_text`, `HexBytes.from_text`).
- `dotstate.shellquote` – `maybe_shell_quote` and `shell_quote_args`, which
  quote arguments for a POSIX shell only when they need it.
- `dotstate.merge` – `recursive_merge(dest, source)` deep-merges nested dicts
  in place, copying nested dicts from the source so the two never share
  state; `recursive_copy` makes such a copy.
- `dotstate.lazy` – `LazyContents` and `LazyLinkname` compute a file's
  contents or a symlink's target once, on demand, and give its SHA-256 digest
  (`contents_sha256`, `linkname_sha256`); a failure is raised again on every
  later call. `sha256_sum` is the digest helper.
- `dotstate.persistentstate` – the `PersistentState` interface (usable as a
  context manager), the in-memory `MockPersistentState`, the no-op
  `NullPersistentState`, and `persistent_state_get`, `persistent_state_set`
  and `persistent_state_data`, which store and read JSON values in buckets.
- `dotstate.encryption` – the `Encryption` interface; `NoEncryption`, which
  raises `NoEncryptionError` from every operation; and `GPGEncryption`, which
  runs `gpg` (the `command` field) to encrypt and decrypt, armored, either for
  a `recipient` or `symmetric`. A non-zero exit raises
  `subprocess.CalledProcessError`.
- `dotstate.patternset` – `doublestar_match` and `doublestar_glob` for glob
  patterns with `*`, `?`, `[...]`, `{a,b}` and `**`, and `PatternSet`, a set of
  include and exclude patterns with `add`, `match` and `glob`. Malformed
  patterns raise `PatternError`.
- `dotstate.system` – the `System` interface, `Command` (arguments, input,
  streams, working directory, environment), `EmptySystemMixin`,
  `NoUpdateSystemMixin` (raises `ReadOnlyError`), `mkdir_all`, and `walk`,
  which visits a tree in lexical order and honours `SkipDir`.
- `dotstate.realsystem` – `RealSystem`, a `System` on disk, optionally
  confined below a root directory that stands for `/`. Without a root,
  files and symlinks are replaced atomically. `run_script` writes the script
  to a private temporary file and runs it in the nearest existing ancestor of
  the requested directory.
- `dotstate.readonlysystem` – `ReadOnlySystem` wraps any `System`, passing
  reads through and refusing every change with `ReadOnlyError`.

## Example

```python
from dotstate.formats import JSONFormat
from dotstate.merge import recursive_merge
from dotstate.paths import AbsPath, RelPath
from dotstate.persistentstate import MockPersistentState, persistent_state_get, persistent_state_set
from dotstate.shellquote import shell_quote_args

home = AbsPath("/home/user")
print(home.join(RelPath(".config"), RelPath("app")))  # /home/user/.config/app

data = {"a": {"b": 1}}
recursive_merge(data, {"a": {"c": 2}})
print(JSONFormat().marshal(data).decode())

print(shell_quote_args(["echo", "hello world"]))      # echo 'hello world'

with MockPersistentState() as state:
    persistent_state_set(state, b"entryState", b"/home/user/.file", {"type": "file"})
    print(persistent_state_get(state, b"entryState", b"/home/user/.file"))
```

## What it does not do

This package is a library of parts. It has no command-line tool, does not
read a source directory of dotfiles or apply it to a home directory, and
keeps persistent state only in memory (`MockPersistentState`); there is no
on-disk state database. It does not record changes as diffs.