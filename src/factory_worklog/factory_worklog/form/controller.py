from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..core.exceptions import OperationInProgressError, StorageError, ValidationError
from ..export.service import XLSX_MIMETYPE

logger = logging.getLogger(__name__)

CONFIRM_DELETE_MESSAGE = "آیا از حذف این رکورد اطمینان دارید؟"

# Generic alerts shown when the store fails, by endpoint.
STORAGE_ALERTS = {
    "form_save": "خطا در اتصال به دیتابیس",
    "form_next": "خطا در ذخیره سازی خودکار",
    "form_delete": "خطا در حذف رکورد",
}
DEFAULT_STORAGE_ALERT = "خطا در اتصال به دیتابیس"


def register(app: Flask, container: Container) -> None:
    form = container.form_service

    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    def _state(status: int = 200, **extra):
        body = {"success": True, **form.snapshot(), **extra}
        return jsonify(body), status

    @app.errorhandler(ValidationError)
    def _validation_failed(e: ValidationError):
        return jsonify({"success": False, "message": str(e), "errors": e.errors}), 400

    @app.errorhandler(OperationInProgressError)
    def _busy(e: OperationInProgressError):
        return jsonify({"success": False, "message": str(e)}), 409

    @app.errorhandler(StorageError)
    def _storage_failed(e: StorageError):
        logger.error("Store operation failed on %s: %s", request.endpoint, e)
        message = STORAGE_ALERTS.get(request.endpoint or "", DEFAULT_STORAGE_ALERT)
        return jsonify({"success": False, "message": message}), 503

    @app.route("/api/form", methods=["GET"], endpoint="form_state")
    def form_state():
        return _state()

    @app.route("/api/form/fields", methods=["POST"], endpoint="form_set_field")
    def form_set_field():
        data = _payload()
        field = data.get("field")
        if not field:
            raise ValidationError("فیلد مشخص نشده است", {"field": "فیلد مشخص نشده است"})
        form.set_field(str(field), data.get("value"))
        return _state()

    @app.route("/api/form/status", methods=["POST"], endpoint="form_set_status")
    def form_set_status():
        form.set_status(_payload().get("status"))
        return _state()

    @app.route("/api/form/logs", methods=["POST"], endpoint="form_add_log")
    def form_add_log():
        log = form.add_work_log()
        return _state(201, log=log.to_dict())

    @app.route("/api/form/logs/<log_id>", methods=["PATCH"], endpoint="form_update_log")
    def form_update_log(log_id: str):
        data = _payload()
        form.update_work_log(log_id, str(data.get("field") or ""), data.get("value"))
        return _state()

    @app.route("/api/form/logs/<log_id>", methods=["DELETE"], endpoint="form_remove_log")
    def form_remove_log(log_id: str):
        form.remove_work_log(log_id)
        return _state()

    @app.route("/api/form/save", methods=["POST"], endpoint="form_save")
    async def form_save():
        await form.save()
        return _state(message="ذخیره شد")

    @app.route("/api/form/next", methods=["POST"], endpoint="form_next")
    async def form_next():
        await form.next()
        return _state()

    @app.route("/api/form/prev", methods=["POST"], endpoint="form_prev")
    def form_prev():
        moved = form.prev()
        return _state(moved=moved)

    @app.route("/api/form/delete", methods=["POST"], endpoint="form_delete")
    async def form_delete():
        if _payload().get("confirm") is not True:
            return jsonify({"success": False, "requiresConfirmation": True, "message": CONFIRM_DELETE_MESSAGE}), 400
        await form.delete()
        return _state()

    @app.route("/api/operators/<code>", methods=["GET"], endpoint="operator_lookup")
    def operator_lookup(code: str):
        operator = container.operators.lookup(code)
        if not operator:
            return jsonify({"success": False, "message": "اپراتور یافت نشد"}), 404
        return jsonify(
            {"success": True, "code": operator.code, "fullName": operator.full_name, "machineCode": operator.machine_code}
        )

    @app.route("/api/products", methods=["GET"], endpoint="product_options")
    def product_options():
        return jsonify({"success": True, "products": container.products.options()})

    @app.route("/export.xlsx", methods=["GET"], endpoint="export_excel")
    def export_excel():
        export = container.exporter.build(form.export_records())
        return send_file(
            io.BytesIO(export.content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=export.filename,
        )
