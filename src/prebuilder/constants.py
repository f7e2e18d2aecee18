
# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "cache": "prebuilder.cache",
    "keys": "prebuilder.cache.keys",
    "key": "prebuilder.cache.keys",
    "policy": "prebuilder.cache.policy",
    "pol": "prebuilder.cache.policy",
    "paths": "prebuilder.cache.paths",
    "store": "prebuilder.cache.store",
    "summary": "prebuilder.cache.summary",
    "clear": "prebuilder.cache.clear",
    "clr": "prebuilder.cache.clear",
    "match": "prebuilder.matching",
    "build": "prebuilder.builder",
    "bld": "prebuilder.builder",
    "proj": "prebuilder.project",
    "io": "prebuilder.io",
    "fs": "prebuilder.io.fs",
    "conf": "prebuilder.config",
}

# Top-level modules within prebuilder for auto-prefixing
KNOWN_TOP_MODULES = {
    "cache",
    "io",
    "rules",
    "datacls",
    "utils",
    "exceptions",
    "config",
    "matching",
    "builder",
    "project",
    "trees",
}

LOG_LEVELS_ENV = "PREBUILD_LOG_LEVELS"


# --- Filenames and Paths ---
PREBUILT_DIRNAME = "pre-built"
METADATA_FILENAME = "metadata"
SUMMARY_LOG_FILENAME = "prebuild.log"
MANIFEST_FILENAME = "package.json"
NODE_MODULES = "node_modules"


# --- Manifest keys ---
PREBUILD_SECTION = "prebuild"
BASE_PATH_KEY = "prebuild-base-path"
EXCLUDE_ADDONS_KEY = "excludeAddons"
TREES_KEY = "trees"
BROWSERSLIST_KEY = "browserslist"
NESTED_APPS_KEY = "apps"
DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")
ADDON_SECTION = "ember-addon"
ADDON_KEYWORD = "ember-addon"

# Companion build option name, as it appears in addon options and metadata
COMPANION_OPTION = "ember-cli-babel"


# --- Environment ---
EXCLUDE_ADDONS_ENV = "EXCLUDEADDONS"


# --- Trees ---
# Structural trees that are never cached
EXCLUDED_TREES = frozenset({
    "app",
    "styles",
    "public",
    "test-support",
    "src",
    "vendor",
    "extractedTemplates",
})

# Trees the `build` command handles when no filter is given
DEFAULT_TREES = ("addon", "templates", "addon-test-support")
