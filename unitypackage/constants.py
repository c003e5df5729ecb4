# Member file names inside each ./<guid>/ directory
MEMBER_META = "asset.meta"
MEMBER_PATHNAME = "pathname"
MEMBER_ASSET = "asset"

# Kinds recognised on read (suffix after the last '.' of the member name)
KIND_META = "meta"
KIND_PATHNAME = "pathname"
KIND_ASSET = "asset"
KNOWN_KINDS = (KIND_PATHNAME, KIND_ASSET, KIND_META)

# Companion metadata files sit next to assets as "<asset>.meta"
META_SUFFIX = ".meta"

# Field of the meta document that keys an entry
IDENTIFIER_FIELD = "guid"

# Writer defaults
DEFAULT_MEMBER_MODE = 0o444
DEFAULT_MTIME = 0
DEFAULT_COMPRESSLEVEL = 9
