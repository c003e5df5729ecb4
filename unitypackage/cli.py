from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from unitypackage.constants import META_SUFFIX
from unitypackage.errors import UnityPackageError
from unitypackage.metadoc import YamlMetaCodec
from unitypackage.package import UnityPackage
from unitypackage.pathutil import dest_path


def _expand_inputs(inputs: List[str]) -> List[str]:
    """Expand directories into themselves plus everything below them.

    Paths keep the form they were given in, since that form becomes the
    entry's pathname. ``.meta`` files are left out; they are picked up as
    companions of their assets.
    """
    out: List[str] = []
    for p in inputs:
        out.append(p)
        if not os.path.isdir(p):
            continue
        for root, dirnames, filenames in os.walk(p):
            dirnames.sort()
            for d in dirnames:
                out.append(os.path.join(root, d))
            for f in sorted(filenames):
                if f.endswith(META_SUFFIX):
                    continue
                out.append(os.path.join(root, f))
    return out


def cmd_list(archive: str) -> bool:
    """List package entries as ``guid<TAB>size<TAB>pathname``.

    Args:
        archive: Path to a .unitypackage file.
    """
    pkg = UnityPackage(archive)
    for guid, entry in pkg:
        size = "-" if entry.asset is None else str(len(entry.asset))
        print(f"{guid}\t{size}\t{entry.pathname}")
    return True


def cmd_info(archive: str) -> bool:
    pkg = UnityPackage(archive)
    assets = [e for _, e in pkg if e.asset is not None]
    print(f"Package: {archive}")
    print(f"  Entries: {len(pkg)}")
    print(f"    Assets: {len(assets)}")
    print(f"    Folders/meta-only: {len(pkg) - len(assets)}")
    print(f"  Asset bytes: {sum(len(e.asset) for e in assets)}")
    return True


def cmd_pack(output: str, inputs: List[str], *, lenient: bool = False, quiet: bool = False) -> bool:
    """Create a package from asset paths.

    Args:
        output: Path of the .unitypackage to write.
        inputs: Asset files or folders; folders are walked recursively.
        lenient: Skip assets without a .meta file instead of failing.
        quiet: Only print the summary line.
    """
    t0 = time.time()
    pkg = UnityPackage(missing_meta_error=not lenient)
    report = pkg.add(_expand_inputs(inputs))
    if not quiet:
        for guid, entry in pkg:
            print(f" adding: {entry.pathname}")
    pkg.save(output)
    dt = max(0.000001, time.time() - t0)
    print(f"Done: {len(pkg)} entries, {len(report.warnings)} without meta; {dt:.1f}s")
    return True


def cmd_unpack(
    archive: str,
    *,
    outdir: str = ".",
    exists: str = "overwrite",
    quiet: bool = False,
    meta_codec: Optional[YamlMetaCodec] = None,
) -> bool:
    """Extract assets and their meta files below ``outdir``.

    Args:
        archive: Path to a .unitypackage file.
        outdir: Destination directory (the Unity project root).
        exists: What to do when a destination file exists: overwrite, skip or fail.
        quiet: Only print the summary line.
        meta_codec: Codec used to read and re-serialize meta documents.
    """
    pkg = UnityPackage(archive, meta_codec=meta_codec)
    written = 0
    for guid, entry in pkg:
        if entry.pathname is None:
            print(f"Warning: {guid} has no pathname; skipped", file=sys.stderr)
            continue
        target = dest_path(outdir, entry.pathname)
        if entry.asset is None:
            os.makedirs(target, exist_ok=True)
        else:
            if os.path.exists(target):
                if exists == "skip":
                    if not quiet:
                        print(f" skipping: {entry.pathname}")
                    continue
                if exists == "fail":
                    raise FileExistsError(target)
            os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
            with open(target, "wb") as fh:
                fh.write(entry.asset)
        if entry.meta is not None:
            with open(target + META_SUFFIX, "wb") as fh:
                fh.write(pkg.meta_codec.serialize(entry.meta))
        written += 1
        if not quiet:
            print(f" unpacking: {entry.pathname}")
    print(f"Done: {written} entries")
    return True


def cmd_repack(archive: str, output: str) -> bool:
    """Rewrite a package in canonical order."""
    pkg = UnityPackage(archive)
    count = pkg.save(output)
    print(f"Done: {count} entries")
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="unitypackage",
        description="Unity .unitypackage archive tool",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_list = sub.add_parser("list", help="List package contents")
    ap_list.add_argument("archive", help="Package path")

    ap_info = sub.add_parser("info", help="Show package information")
    ap_info.add_argument("archive", help="Package path")

    ap_pack = sub.add_parser("pack", help="Create a package from assets")
    ap_pack.add_argument("output", help="Output .unitypackage path")
    ap_pack.add_argument("inputs", nargs="+", help="Asset files/folders (each needs a .meta file)")
    ap_pack.add_argument("--lenient", action="store_true", help="Skip assets without a .meta file instead of failing")
    ap_pack.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    ap_unpack = sub.add_parser("unpack", help="Extract assets and meta files")
    ap_unpack.add_argument("archive", help="Package path")
    ap_unpack.add_argument("--outdir", default=".", help="Output directory")
    ap_unpack.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")
    ap_unpack.add_argument(
        "--exists",
        choices=["overwrite", "skip", "fail"],
        default="overwrite",
        help="What to do if a destination file exists (default: overwrite)",
    )

    ap_repack = sub.add_parser("repack", help="Rewrite a package canonically")
    ap_repack.add_argument("archive", help="Package path")
    ap_repack.add_argument("output", help="Output .unitypackage path")

    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="Warning: %(message)s")
    try:
        if args.cmd == "list":
            cmd_list(args.archive)
        elif args.cmd == "info":
            cmd_info(args.archive)
        elif args.cmd == "pack":
            cmd_pack(args.output, args.inputs, lenient=args.lenient, quiet=args.quiet)
        elif args.cmd == "unpack":
            cmd_unpack(args.archive, outdir=args.outdir, exists=args.exists, quiet=args.quiet)
        elif args.cmd == "repack":
            cmd_repack(args.archive, args.output)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (UnityPackageError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
