"""Minimal runner for the university registry.

Usage:
  python run_registry.py --add "State College" state.test --caller admin
  python run_registry.py --account-id state.test
  python run_registry.py --name "State College" --json
  python run_registry.py --all

Backend and owner come from config.settings (REGISTRY_BACKEND,
REGISTRY_OWNER_ID, REDIS_URL). The memory backend forgets everything when the
process exits; use redis to keep records between runs.
"""
import argparse
import json
import logging
import sys

from config import settings
from university_registry.factory import create_registry_service


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description='Register and look up universities')
	group = parser.add_mutually_exclusive_group(required=True)
	group.add_argument('--add', nargs=2, metavar=('NAME', 'ACCOUNT_ID'), help='Register a university (owner only)')
	group.add_argument('--account-id', help='Look up one university by account id')
	group.add_argument('--name', help='List universities sharing a name')
	group.add_argument('--all', action='store_true', help='List every registered university')
	group.add_argument('--check', action='store_true', help='Verify both indexes agree')
	parser.add_argument('--caller', help='Calling identity for writes (defaults to REGISTRY_OWNER_ID)')
	parser.add_argument('--backend', choices=['memory', 'redis'], default=None, help='Override REGISTRY_BACKEND')
	parser.add_argument('--json', action='store_true', help='Emit the raw JSON envelope')
	return parser


def main(argv=None) -> int:
	args = build_parser().parse_args(argv)
	logging.basicConfig(level=getattr(logging, settings.REGISTRY_LOG_LEVEL, logging.INFO))
	service = create_registry_service(kind=args.backend)

	if args.check:
		problems = service.registry.check_consistency()
		for p in problems:
			print(p)
		print('consistent' if not problems else f'{len(problems)} problem(s)')
		return 0 if not problems else 1

	if args.add:
		caller = args.caller or settings.REGISTRY_OWNER_ID
		result = service.call('add_university', {'name': args.add[0], 'account_id': args.add[1]}, caller=caller)
	elif args.account_id:
		result = service.call('get_university_by_account_id', {'account_id': args.account_id})
	elif args.name:
		result = service.call('get_universities_by_name', {'name': args.name})
	else:
		result = service.call('get_all_universities')

	if args.json:
		print(json.dumps(result.to_dict(), default=str, ensure_ascii=False, indent=2))
	elif not result.ok:
		print(f"{result.status}: {result.error}", file=sys.stderr)
	elif not result.records:
		print('no universities found')
	else:
		for rec in result.records:
			print(f"{rec['account_id']}\t{rec['name']}")
	return 0 if result.ok else 1


if __name__ == '__main__':
	sys.exit(main())
