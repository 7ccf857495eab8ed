# Run a worker for queued generation:
# celery -A scholarspace.scholarspace_main worker -l info

from celery import shared_task
from celery.utils.log import get_task_logger
from django.contrib.auth import get_user_model
from scholarspace.report_cards.utils.generator import generate_report_cards
from scholarspace.report_cards.exceptions import ReportCardError
from scholarspace.action_logs.utils.action_log import log_action_async
from scholarspace.action_logs.models.action_log import ActionCategory
import traceback

logger = get_task_logger(__name__)


@shared_task(bind=True)
def generate_report_cards_task(self, class_id, academic_year, term, generated_by_id=None):
    """Generate a class's report cards off the request cycle"""
    generated_by = None
    if generated_by_id:
        generated_by = get_user_model().objects.filter(id=generated_by_id).first()

    try:
        result = generate_report_cards(
            class_id, academic_year, term, generated_by=generated_by
        )
    except ReportCardError as e:
        # Precondition failures are reported, not retried
        logger.warning(
            f"Report card generation for class {class_id} refused: {e.message}"
        )
        return {"status": "error", **e.as_response_data()}
    except Exception as e:
        error_msg = f"Failed to generate report cards for class {class_id}: {str(e)}"
        logger.error(error_msg)
        log_action_async(
            user=generated_by,
            action=error_msg,
            category=ActionCategory.SYSTEM,
            metadata={
                "task_id": self.request.id,
                "class_id": class_id,
                "academic_year": academic_year,
                "term": term,
                "error": str(e),
                "traceback": traceback.format_exc(),
            },
        )
        raise

    logger.info(
        f"Task {self.request.id} generated {result['generated']} report cards "
        f"for class {class_id}"
    )
    return {"status": "success", **result}
