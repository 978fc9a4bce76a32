"""FastAPI application exposing PDU generation, inspection and sending."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from serial import SerialException

from pdugen.sms.errors import ModemError, PduError
from pdugen.sms.pdu import build_pdus, parse_submit
from pdugen.sms.sender import send_sms

app = FastAPI()


class MessageIn(BaseModel):
    number: str
    text: str
    flash: bool = False
    report: bool = False


class SendIn(MessageIn):
    device: str | None = None


class PduIn(BaseModel):
    pdu: str


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/pdus")
def api_pdus(message: MessageIn) -> dict[str, object]:
    try:
        pdus = build_pdus(
            message.number, message.text, flash=message.flash, report=message.report
        )
    except PduError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "alphabet": pdus[0]["alphabet"],
        "segments": len(pdus),
        "pdus": pdus,
    }


@app.post("/api/pdus/inspect")
def api_inspect(data: PduIn) -> dict[str, object]:
    try:
        return parse_submit(data.pdu)
    except PduError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/api/messages")
def api_send(message: SendIn) -> dict[str, object]:
    try:
        refs = send_sms(
            message.number,
            message.text,
            device=message.device,
            flash=message.flash,
            report=message.report,
        )
    except ModemError as exc:
        logging.warning("modem rejected message to %s: %s", message.number, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except SerialException as exc:
        logging.warning("modem unavailable: %s", exc)
        raise HTTPException(status_code=503, detail="modem unavailable") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"refs": refs}
