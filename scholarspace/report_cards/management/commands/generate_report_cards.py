from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from scholarspace.report_cards.utils.generator import generate_report_cards
from scholarspace.report_cards.exceptions import ReportCardError


class Command(BaseCommand):
    help = "Generate draft report cards for a class, academic year and term"

    def add_arguments(self, parser):
        parser.add_argument("class_id", type=int)
        parser.add_argument("academic_year", type=str)
        parser.add_argument("term", type=int, choices=[1, 2, 3])
        parser.add_argument(
            "--generated-by",
            type=int,
            dest="generated_by",
            help="ID of the user recorded as generating the cards",
        )

    def handle(self, *args, **options):
        generated_by = None
        if options["generated_by"]:
            User = get_user_model()
            try:
                generated_by = User.objects.get(id=options["generated_by"])
            except User.DoesNotExist:
                raise CommandError(f"User {options['generated_by']} does not exist")

        try:
            result = generate_report_cards(
                options["class_id"],
                options["academic_year"],
                options["term"],
                generated_by=generated_by,
            )
        except ReportCardError as e:
            raise CommandError(e.message)

        self.stdout.write(
            self.style.SUCCESS(
                f"Generated {result['generated']}/{result['total']} report cards "
                f"for {result['class_name']} ({result['academic_year']} term {result['term']})"
            )
        )
        for failure in result["failed"]:
            self.stdout.write(
                self.style.ERROR(
                    f"  student {failure['student_id']}: {failure['error']}"
                )
            )
        if result["unranked"]:
            self.stdout.write(
                self.style.WARNING(
                    f"  {len(result['unranked'])} report card(s) could not be ranked"
                )
            )
