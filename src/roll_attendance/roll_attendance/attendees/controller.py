from __future__ import annotations

import io
import logging

import qrcode
from flask import Flask, jsonify, request, send_file
from PIL import Image

from ..common.normalizers import normalize_roll_number
from ..container import Container
from ..core.constants import EXPORT_FILENAME
from ..core.enums import MarkStatus, RollStatus
from ..core.exceptions import ImportIOError, StorageError
from .csv_io import decode_upload, export_csv_bytes, read_roll_numbers

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    ledger = container.ledger

    def _scan_response(code: object):
        result = ledger.mark_attended(code)
        roll = result.roll_number

        if result.status == MarkStatus.MARKED_NOW:
            message, http_status = f"Roll No: {roll} marked successfully!", 200
        elif result.status == MarkStatus.ALREADY_MARKED:
            message, http_status = f"Roll No: {roll} already marked!", 200
        else:
            message, http_status = f"Roll No: {roll} not found!", 404

        return jsonify({
            "success": result.marked_now,
            "status": result.status.value,
            "prior": result.prior.value,
            "roll_number": roll,
            "message": message,
        }), http_status

    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    def api_scan():
        """Mark attendance for a roll number decoded by the scanner."""
        try:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                data = {}
            return _scan_response(data.get("code"))
        except StorageError:
            raise
        except Exception:
            logger.exception("Scan processing failed")
            return jsonify({"success": False, "message": "System error while marking attendance"}), 500

    @app.route("/api/scan/image", methods=["POST"], endpoint="api_scan_image")
    def api_scan_image():
        """Decode a QR code from an uploaded image, then mark it."""
        try:
            if "image" not in request.files:
                return jsonify({"success": False, "message": "Missing image file"}), 400

            # pyzbar needs the native zbar library, so only load it when used.
            from pyzbar.pyzbar import decode as pyzbar_decode

            img = Image.open(request.files["image"].stream).convert("RGB")
            decoded = pyzbar_decode(img)
            if not decoded:
                return jsonify({"success": False, "message": "No QR code found in image"}), 400

            return _scan_response(decoded[0].data.decode("utf-8"))
        except StorageError:
            raise
        except Exception:
            logger.exception("Image scan failed")
            return jsonify({"success": False, "message": "System error while marking attendance"}), 500

    @app.route("/api/attendees/<roll_number>", methods=["GET"], endpoint="api_search")
    def api_search(roll_number: str):
        roll = normalize_roll_number(roll_number)
        status = ledger.lookup(roll)
        if status == RollStatus.NOT_FOUND:
            return jsonify({
                "found": False,
                "status": status.value,
                "roll_number": roll,
                "message": f"Roll No: {roll} not found",
            }), 404

        label = "Attendance marked" if status == RollStatus.ALREADY_MARKED else "Not marked"
        return jsonify({
            "found": True,
            "status": status.value,
            "roll_number": roll,
            "marked": status == RollStatus.ALREADY_MARKED,
            "message": f"Roll No: {roll} -> {label}",
        }), 200

    @app.route("/api/attendees", methods=["GET"], endpoint="api_records")
    def api_records():
        records = ledger.all_records()
        summary = ledger.summary()
        return jsonify({
            "records": [{"roll_number": r.roll_number, "marked": r.marked} for r in records],
            "summary": {"total": summary.total, "marked": summary.marked, "unmarked": summary.unmarked},
            "message": "" if records else "No records found!",
        }), 200

    @app.route("/api/import", methods=["POST"], endpoint="api_import")
    def api_import():
        if "file" not in request.files:
            return jsonify({"success": False, "message": "Missing CSV file"}), 400

        try:
            lines = decode_upload(request.files["file"].read())
        except (OSError, UnicodeDecodeError):
            logger.exception("Could not read uploaded CSV")
            return jsonify({"success": False, "imported": 0, "message": "Failed to import CSV"}), 400

        try:
            imported = ledger.import_roll_numbers(read_roll_numbers(lines))
        except ImportIOError as e:
            return jsonify({
                "success": False,
                "imported": e.imported,
                "message": f"Failed to import CSV ({e.imported} rows imported before the error)",
            }), 500

        return jsonify({
            "success": True,
            "imported": imported,
            "message": f"Imported {imported} students from CSV",
        }), 200

    @app.route(f"/{EXPORT_FILENAME}", methods=["GET"], endpoint="export_csv")
    def export_csv():
        csv_bytes = export_csv_bytes(ledger.export_snapshot())
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
        )

    @app.route("/api/reset", methods=["POST"], endpoint="api_reset")
    def api_reset():
        ledger.reset_all()
        return jsonify({"success": True, "message": "Attendance reset successfully"}), 200

    @app.route("/api/attendees/<roll_number>/qr.png", methods=["GET"], endpoint="roll_qr_image")
    def roll_qr_image(roll_number: str):
        """QR badge encoding the normalized roll number, for printing."""
        roll = normalize_roll_number(roll_number)
        if not roll:
            return jsonify({"success": False, "message": "Roll number is empty"}), 400

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(roll)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)

        return send_file(buf, mimetype="image/png")
