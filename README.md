# fastbin

fastbin is a small binary manager. Give it a URL and it downloads either a
single executable or a compressed tar archive. If it gets an archive, it finds
the executables inside, unpacks them and moves them into your user binary
directory.

## Installation

```
pip install .
```

## Usage

Install a binary from a URL:

```
fastbin install https://example.com/releases/tool-linux-amd64.tar.gz
```

`i` is a short alias for `install`:

```
fastbin i https://example.com/releases/tool
```

Other options:

```
fastbin --help
fastbin --version
```

When something goes wrong, the command prints `fastbin: <message>` to
standard error and exits with status 1.

### What happens during an install

1. The file is downloaded into a `fastbin` directory under the system
   temporary directory, named after the last part of the URL. A progress bar
   is shown while it downloads, and `✅ Download completed` is printed at the
   end. An HTTP error status stops the install with `response is not OK`.
2. A file name with no extension is taken to be a binary. It is made
   executable for its owner and nothing more needs to be done to it.
3. Any other file is treated as a compressed tar archive. The codec is chosen
   from the last extension: `.gz`, `.bzip2` or `.xz`. Any other extension
   (for example `.tgz`, `.bz2` or `.zip`, or a dotted version number at the
   end of a bare binary's name) is refused as an unsupported compression
   format.
   Inside the archive, entries that are not directories and have no file
   extension count as candidate binaries. Candidates with any execute
   permission bit set are preferred.
   - If there is exactly one executable, that one is used.
   - If there are several, you are shown a numbered list and asked which to
     install; answer with one or more numbers separated by commas or spaces.
   - If none of them are marked executable, you are shown the candidates and
     asked to pick one, by number or by name. A name that is not in the
     archive gives `Executable not found`.
4. Each selected entry is extracted into the temporary directory, given the
   owner's execute bit and a SHA-256 hash, and then moved into your binary
   directory under its base name. That directory is `$XDG_BIN_HOME` if it is
   set to an absolute path, and `~/.local/bin` otherwise. It is not created
   for you; it must already exist.

### The database

On every run fastbin opens (creating if needed) a SQLite database,
`fastbin.db`, in the current directory, takes an exclusive lock on it and
makes sure its `binaries` table exists. If another fastbin process holds the
lock for more than a second, the command stops with
`Cannot acquire lock on binary database`.

## What fastbin does not do

- Installs are not yet recorded in the database; the table is created but
  nothing is written to it.
- There are no commands to list, update or remove installed binaries.
- Only direct URLs are understood; there is no lookup of releases by project
  name.
- No checksums are verified against published values; the SHA-256 hash is
  only computed.

## Using it as a library

```python
from fastbin.sources import new_source

url = "https://example.com/releases/tool.tar.xz"
downloaded = new_source(url).download(url)
if not downloaded.is_binary():
    members = downloaded.find_executables()
    downloaded.extract(members)
for binary in downloaded.binaries:
    print(binary.name, binary.location, binary.hash)
```

`find_executables` and `extract` take an optional `chooser` callable in place
of the interactive prompts (`fastbin.file.choose_one` and
`fastbin.file.choose_many`).

`fastbin.install.install(url)` runs the full install flow, the same one the
`install` command uses, and returns the paths it installed to. Errors raised
by the package are `fastbin.errors.AppError` or its subclasses.

## Development

```
pip install -e ".[test]"
pytest
```