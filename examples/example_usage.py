"""Example: drive the form service directly (without Flask).

Controllers are a thin layer; the navigation and validation rules live in
FormService.
"""

import asyncio
import importlib

from config import get_settings_module

from src.factory_worklog.factory_worklog.container import build_container


async def main():
    settings = importlib.import_module(get_settings_module())
    form = build_container(settings).form_service
    await form.load()

    form.set_field("operatorCode", "۴۷")
    log_id = form.current.work_logs[0].id
    form.update_work_log(log_id, "productDescription", "نخ")
    await form.save()

    print(form.position_label, form.current.full_name, form.current.total_presence)


if __name__ == "__main__":
    asyncio.run(main())
