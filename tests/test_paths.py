from i18n_helper.store.models import ProjectConfig
from i18n_helper.store.paths import native_path, resolve

PROJECTS = [
    ProjectConfig(name="app", path="i18n/app"),
    ProjectConfig(name="admin", path="i18n/admin"),
]


def test_resolve_posix():
    ident = resolve("/work/i18n/app/en.json", PROJECTS, "/work", "/")
    assert ident.project == "app"
    assert ident.locale == "en"


def test_resolve_nested_namespace_keeps_separator():
    ident = resolve("/work/i18n/admin/common/en.json", PROJECTS, "/work", "/")
    assert ident.project == "admin"
    assert ident.locale == "common/en"


def test_resolve_windows_separator():
    ident = resolve("C:\\work\\i18n\\app\\sub\\fr.json", PROJECTS, "C:\\work", "\\")
    assert ident.project == "app"
    assert ident.locale == "sub\\fr"


def test_outside_every_project():
    ident = resolve("/work/src/en.json", PROJECTS, "/work", "/")
    assert ident.project is None
    assert ident.locale == ""


def test_non_json_file_has_empty_locale():
    ident = resolve("/work/i18n/app/notes.txt", PROJECTS, "/work", "/")
    assert ident.project == "app"
    assert ident.locale == ""


def test_prefix_must_end_on_directory_boundary():
    projects = [ProjectConfig(name="app", path="i18n/app"), ProjectConfig(name="apps", path="i18n/apps")]
    ident = resolve("/work/i18n/apps/en.json", projects, "/work", "/")
    assert ident.project == "apps"


def test_first_matching_project_wins():
    projects = [ProjectConfig(name="outer", path="i18n"), ProjectConfig(name="inner", path="i18n/app")]
    ident = resolve("/work/i18n/app/en.json", projects, "/work", "/")
    assert ident.project == "outer"
    assert ident.locale == "app/en"


def test_regex_metacharacters_in_project_path():
    projects = [ProjectConfig(name="x", path="i18n/a+b (v1)")]
    ident = resolve("/work/i18n/a+b (v1)/de.json", projects, "/work", "/")
    assert ident.locale == "de"


def test_trailing_separator_on_workspace_root():
    ident = resolve("/work/i18n/app/en.json", PROJECTS, "/work/", "/")
    assert ident.locale == "en"


def test_native_path():
    assert native_path("i18n/app/", "\\") == "i18n\\app"
    assert native_path("i18n\\app", "/") == "i18n/app"
