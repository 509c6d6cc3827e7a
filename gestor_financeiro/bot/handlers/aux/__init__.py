from .send_plan_preview import send_plan_preview
