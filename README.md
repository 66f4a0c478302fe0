# bedrock_updater

Checks for a new Minecraft Bedrock dedicated server release and installs it
next to your existing ones. It uses only the Python standard library.

On each run it:

1. Reads the latest Bedrock version and the link to its page from the wiki
   navigation.
2. Finds the Windows server download link (`.../bedrockdedicatedserver/bin-win/bedrock-server-<version>.zip`)
   on that page. The lookup is tried up to three times, waiting one, two and
   three seconds after the failed attempts.
3. If the version differs from the one you have, downloads the zip into your
   server directory and extracts it to `bedrock-server-<version>/`, where
   `<version>` is taken from the zip file name.
4. Copies the `worlds` folder from `Latest/worlds` into the new directory. If
   `Latest/worlds` does not exist, it uses the `worlds` folder of another
   `bedrock-server-*` directory instead (the last one in name order that has
   one). If no worlds are found, nothing is copied.
5. Points the `Latest` symlink at the new directory, replacing the old link.

## Installation

```
pip install .
```

## Configuration

Create a JSON file (by default `config.json` in the current directory):

```json
{
  "server_dir": "/srv/bedrock",
  "network_share": "",
  "wiki_nav_url": "https://minecraft.wiki/",
  "last_version_file": "/srv/bedrock/last_version.txt"
}
```

Unknown keys are ignored and missing keys are left empty. If `wiki_nav_url`
is empty, `https://minecraft.wiki/` is used. The contents of
`last_version_file`, if it is set and the file can be read, are taken
verbatim as the currently installed version (so keep the file free of a
trailing newline). `network_share` is read but not used.

## Usage

```
bedrock-updater --config /path/to/config.json
```

`-config` is accepted as well as `--config`. The command prints the loaded
configuration and then `Update completed successfully.` or
`No update needed.`, exiting with status 0. If the configuration cannot be
read or the update fails, it prints a time-stamped message to standard error
and exits with status 1.

Creating the `Latest` symlink needs the right to make symbolic links, which on
Windows may mean running with elevated rights or in developer mode.

## Using it from Python

```python
from bedrock_updater.config import load_config
from bedrock_updater.downloader import default_symlink_updater, update_server_if_new
from bedrock_updater.version import get_latest_bedrock_version, parse_bedrock_version

cfg = load_config("config.json")
version, zip_url = get_latest_bedrock_version(cfg.wiki_nav_url)
print(version, parse_bedrock_version(zip_url))

updated = update_server_if_new("1.20.0.0", cfg, default_symlink_updater)
```

`update_server_if_new` takes any callable `(target, link)` in place of
`default_symlink_updater`, for example one that does nothing. The
`downloader` module also offers `download_file`, `extract_zip` and
`copy_dir`, and the `version` module offers `parse_bedrock_version_and_url`
for pulling the first server zip link and its version out of a page.

`load_config` raises `ConfigError`, version lookups raise
`VersionLookupError`, and failures during an update raise `UpdateError`.

## What it does not do

- It does not record the newly installed version: `last_version_file` is
  only read, never written, so keep it up to date yourself.
- It does not start, stop or restart the server.
- It does not remove old `bedrock-server-*` directories or downloaded zips.

## Running the tests

```
pip install .[test]
pytest
```