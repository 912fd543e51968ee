"""Create a starter tools root: .env, site list, build manifest and templates."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from xtools_common import XamppConfig

_SCAFFOLD_DIR = Path(__file__).resolve().parent.parent / "templates" / "scaffold"

HOSTS_OUTPUT = "xtools/hosts"
VHOSTS_BLOCKS = "apache/conf/extra/httpd-vhosts-blocks.conf"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_SCAFFOLD_DIR)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def scaffold_files(cfg: XamppConfig) -> list[tuple[str, Path]]:
    """(template name, destination) pairs written by ``xtools init``."""
    return [
        ("env.j2", cfg.env_file),
        ("vhosts.json.j2", cfg.sites_file),
        ("build-manifest.json.j2", cfg.manifest_file),
        ("hosts.j2", cfg.templates_dir / "hosts"),
        ("httpd-vhosts-blocks.conf.j2", cfg.templates_dir / VHOSTS_BLOCKS),
        ("index.php.j2", cfg.templates_dir / "root" / "index.php"),
        ("phpinfo.php.j2", cfg.templates_dir / "root" / "phpinfo.php"),
    ]


def write_scaffold(cfg: XamppConfig, *, force: bool = False) -> list[tuple[Path, bool]]:
    """Render the starter files; existing files are kept unless *force*.

    Returns (path, written) for every scaffold file.
    """
    env = _get_env()
    context = {
        "xampp_root": cfg.xampp_root,
        "document_root": cfg.docroot,
        "http_port": cfg.http_port,
        "ssl_port": cfg.ssl_port,
        "vhosts_extension": cfg.vhosts_extension,
        "mysql_host": cfg.mysql_host,
        "mysql_port": cfg.mysql_port,
        "mysql_user": cfg.mysql_user,
        "hosts_output": HOSTS_OUTPUT,
    }
    results = []
    for name, dest in scaffold_files(cfg):
        if dest.exists() and not force:
            results.append((dest, False))
            continue
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(env.get_template(name).render(**context), encoding="utf-8")
        results.append((dest, True))
    return results
