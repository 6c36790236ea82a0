"""
Command-Line Interface for the FilmMate exposure assistant

Provides commands for browsing the reference catalog, calculating exposure
settings and keeping a shot log.
"""

import os
import sys
import argparse
import logging

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from models import ExposureSettings, ShotLog
from calculators import ExposureCalculator, exposure_value
from catalog import ReferenceCatalog
from database import DatabaseManager
from reporters import TextReporter
from state import UserSession, AppState

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _lookup(catalog: ReferenceCatalog, args):
    """Resolve catalog ids from the command line into records."""
    lookups = [
        ('camera', args.camera, catalog.get_camera),
        ('lens', args.lens, catalog.get_lens),
        ('film stock', args.film, catalog.get_film_stock),
        ('lighting condition', args.lighting, catalog.get_lighting_condition),
    ]
    records = []
    for label, record_id, getter in lookups:
        record = getter(record_id)
        if record is None:
            raise ValueError(f"Unknown {label}: {record_id}")
        records.append(record)
    return records


def _edited_settings(chosen: ExposureSettings, camera, lens, lighting, args) -> ExposureSettings:
    """Apply --aperture/--shutter edits to the chosen settings."""
    if args.aperture is None and args.shutter is None:
        return chosen

    aperture = args.aperture if args.aperture is not None else chosen.aperture
    shutter_speed = args.shutter if args.shutter is not None else chosen.shutter_speed

    if aperture not in lens.available_apertures:
        raise ValueError(f"{lens.name} has no aperture f/{aperture:g}")
    if shutter_speed not in camera.available_shutter_speeds:
        raise ValueError(f"{camera.name} has no shutter speed {shutter_speed:g}")

    delta = exposure_value(aperture, shutter_speed, chosen.iso) - lighting.ev_value
    return ExposureSettings(
        aperture=aperture,
        shutter_speed=shutter_speed,
        iso=chosen.iso,
        exposure_delta=round(delta, 2)
    )


def _find_log(db: DatabaseManager, username: str, log_id: str) -> ShotLog:
    """Find a user's shot log by full id or unique id prefix."""
    shot_log = db.get_shot_log(username, log_id)
    if shot_log:
        return shot_log

    matching = [log for log in db.load_shot_logs(username) if log.id.startswith(log_id)]
    if not matching:
        raise ValueError(f"Shot log not found: {log_id}")
    if len(matching) > 1:
        raise ValueError(f"Shot log id prefix is ambiguous: {log_id}")
    return matching[0]


def cmd_catalog(args):
    """List reference cameras, lenses, films or lighting conditions."""
    catalog = ReferenceCatalog.from_config(args.config)

    if args.type == 'cameras':
        logger.info(f"\nCameras ({len(catalog.cameras)}):")
        logger.info("-" * 80)
        for camera in catalog.cameras:
            speeds = ', '.join(f"{s:g}" for s in camera.available_shutter_speeds)
            logger.info(f"  {camera.id:25} | {camera.name:25} | {speeds}")

    elif args.type == 'lenses':
        logger.info(f"\nLenses ({len(catalog.lenses)}):")
        logger.info("-" * 80)
        for lens in catalog.lenses:
            apertures = ', '.join(f"{a:g}" for a in lens.available_apertures)
            logger.info(f"  {lens.id:25} | {lens.name:25} | {apertures}")

    elif args.type == 'films':
        logger.info(f"\nFilm stocks ({len(catalog.film_stocks)}):")
        logger.info("-" * 80)
        for film in catalog.film_stocks:
            logger.info(
                f"  {film.id:25} | {film.name:20} | ISO {film.iso:5} | "
                f"{film.film_type.value:13} | +{film.latitude.over:g}/-{film.latitude.under:g}"
            )

    elif args.type == 'lighting':
        logger.info(f"\nLighting conditions ({len(catalog.lighting_conditions)}):")
        logger.info("-" * 80)
        for lighting in catalog.lighting_conditions:
            logger.info(f"  {lighting.id:25} | EV {lighting.ev_value:4g} | {lighting.description}")


def cmd_calculate(args):
    """Calculate exposure settings and optionally log the shot."""
    catalog = ReferenceCatalog.from_config(args.config)
    reporter = TextReporter.from_config(args.config)
    camera, lens, film, lighting = _lookup(catalog, args)

    state = (
        AppState()
        .select_camera(camera)
        .select_lens(lens)
        .select_film_stock(film)
        .select_lighting_condition(lighting)
        .calculate(ExposureCalculator())
    )
    result = state.result

    logger.info(f"\n{camera.name} + {lens.name}, {film.name}, {lighting.name} (EV {lighting.ev_value:g})\n")
    logger.info(reporter.format_result(result, film))

    if not args.log:
        return

    options = result.all_settings()
    if not 0 <= args.choose < len(options):
        raise ValueError(f"--choose must be between 0 and {len(options) - 1}")

    chosen = options[args.choose]
    shot_log = ShotLog.from_result(
        camera, lens, film, lighting, result,
        chosen=chosen,
        notes=args.notes,
        rating=args.rating
    )
    shot_log.selected_settings = _edited_settings(chosen, camera, lens, lighting, args)

    session = UserSession.from_config(args.config)
    session.load()
    username = session.require_username()

    with DatabaseManager.from_config(args.config) as db:
        db.get_or_create_username(username)
        db.save_shot_log(username, shot_log)

    logger.info(f"\n✓ Logged shot {shot_log.id} for {username}")


def cmd_user(args):
    """Show, set or clear the current username."""
    session = UserSession.from_config(args.config)
    session.load()

    if args.action == 'show':
        if session.is_signed_in:
            logger.info(f"Current user: {session.username}")
        else:
            logger.info("No user set. Use: cli.py user set <username>")

    elif args.action == 'set':
        if not args.username:
            raise ValueError("A username is required")

        session.switch_user(args.username)
        with DatabaseManager.from_config(args.config) as db:
            if db.get_or_create_username(session.username):
                logger.info(f"✓ Created user {session.username}")
            else:
                logger.info(f"✓ Welcome back, {session.username}")

    elif args.action == 'clear':
        session.clear()
        logger.info("✓ Signed out")


def cmd_logs(args):
    """List, inspect, edit, delete or export shot logs."""
    session = UserSession.from_config(args.config)
    session.load()
    username = session.require_username()
    reporter = TextReporter.from_config(args.config)

    with DatabaseManager.from_config(args.config) as db:
        if args.action == 'list':
            state = AppState().load_shot_logs(db.load_shot_logs(username)).show_logs()
            logger.info(reporter.format_shot_log_list(state.shot_logs))

        elif args.action == 'show':
            logger.info(reporter.format_shot_log(_find_log(db, username, args.log_id)))

        elif args.action == 'rate':
            shot_log = _find_log(db, username, args.log_id)
            shot_log.rating = args.rating
            db.update_shot_log(username, shot_log)
            logger.info(f"✓ Rated {shot_log.id}: {args.rating}/5")

        elif args.action == 'notes':
            shot_log = _find_log(db, username, args.log_id)
            shot_log.notes = ShotLog.clean_notes(args.notes)
            db.update_shot_log(username, shot_log)
            logger.info(f"✓ Updated notes for {shot_log.id}")

        elif args.action == 'delete':
            shot_log = _find_log(db, username, args.log_id)
            db.delete_shot_log(username, shot_log.id)
            logger.info(f"✓ Deleted {shot_log.id}")

        elif args.action == 'export':
            path = reporter.generate_report(username, db.load_shot_logs(username), filename=args.output)
            logger.info(f"✓ Report saved to: {path}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='FilmMate exposure assistant',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Browse the catalog
  python cli.py catalog lenses

  # Calculate settings for a sunny day on Portra 400
  python cli.py calculate --camera canon-ae1 --lens canon-fd-50mm-f1.8 \\
      --film kodak-portra-400 --lighting bright-sun

  # Log the second alternative, stopped down to f/11
  python cli.py user set ansel
  python cli.py calculate --camera canon-ae1 --lens canon-fd-50mm-f1.8 \\
      --film kodak-portra-400 --lighting bright-sun --log --choose 2 --aperture 11

  # Review the log
  python cli.py logs list
  python cli.py logs rate 3f2a 5
        '''
    )

    parser.add_argument('--config', default='config.yaml', help='Path to config file')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Catalog command
    catalog_parser = subparsers.add_parser('catalog', help='List reference data')
    catalog_parser.add_argument('type', choices=['cameras', 'lenses', 'films', 'lighting'],
                                help='What to list')
    catalog_parser.set_defaults(func=cmd_catalog)

    # Calculate command
    calc_parser = subparsers.add_parser('calculate', help='Calculate exposure settings')
    calc_parser.add_argument('--camera', required=True, help='Camera id')
    calc_parser.add_argument('--lens', required=True, help='Lens id')
    calc_parser.add_argument('--film', required=True, help='Film stock id')
    calc_parser.add_argument('--lighting', required=True, help='Lighting condition id')
    calc_parser.add_argument('--log', action='store_true', help='Save the shot to the log')
    calc_parser.add_argument('--choose', type=int, default=0,
                             help='Settings to log: 0 = recommended, 1-3 = alternative')
    calc_parser.add_argument('--aperture', type=float, help='Override the chosen aperture')
    calc_parser.add_argument('--shutter', type=float, help='Override the chosen shutter speed')
    calc_parser.add_argument('--notes', help='Shot description')
    calc_parser.add_argument('--rating', type=int, choices=range(1, 6), help='1-5 stars')
    calc_parser.set_defaults(func=cmd_calculate)

    # User command
    user_parser = subparsers.add_parser('user', help='Manage the current user')
    user_parser.add_argument('action', choices=['show', 'set', 'clear'])
    user_parser.add_argument('username', nargs='?', help='Username for "set"')
    user_parser.set_defaults(func=cmd_user)

    # Logs command
    logs_parser = subparsers.add_parser('logs', help='Manage the shot log')
    logs_sub = logs_parser.add_subparsers(dest='action', required=True)

    logs_sub.add_parser('list', help='List shot logs, newest first')

    show_parser = logs_sub.add_parser('show', help='Show one shot log')
    show_parser.add_argument('log_id', help='Log id or unique prefix')

    rate_parser = logs_sub.add_parser('rate', help='Rate a shot')
    rate_parser.add_argument('log_id', help='Log id or unique prefix')
    rate_parser.add_argument('rating', type=int, choices=range(1, 6))

    notes_parser = logs_sub.add_parser('notes', help='Replace the notes of a shot')
    notes_parser.add_argument('log_id', help='Log id or unique prefix')
    notes_parser.add_argument('notes', help='New notes ("" to clear)')

    delete_parser = logs_sub.add_parser('delete', help='Delete a shot log')
    delete_parser.add_argument('log_id', help='Log id or unique prefix')

    export_parser = logs_sub.add_parser('export', help='Export the shot log as text')
    export_parser.add_argument('--output', help='Output filename')

    logs_parser.set_defaults(func=cmd_logs)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
