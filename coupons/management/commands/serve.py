import logging

from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

from coupons.exceptions import StorageError
from coupons.repository import get_repository

logger = logging.getLogger("coupons.serve")


class Command(BaseCommand):
    help = "Ensure the coupon schema exists, then start the API server."

    def add_arguments(self, parser):
        parser.add_argument(
            "addrport",
            nargs="?",
            default=None,
            help="Address to listen on, defaults to COUPON_LISTEN_ADDRESS.",
        )

    def handle(self, *args, **options):
        logger.info("Starting API Server")
        repository = get_repository()
        try:
            repository.connect()
            repository.initialize()
        except StorageError as exc:
            raise CommandError(str(exc)) from exc

        addrport = options["addrport"] or settings.COUPON_LISTEN_ADDRESS
        logger.info("Starting API Server on %s", addrport)
        call_command("runserver", addrport, use_reloader=False)
