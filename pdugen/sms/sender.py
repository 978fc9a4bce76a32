"""Submitting generated PDUs to an AT-command modem over a serial port."""

from __future__ import annotations

import logging
import os
from typing import List

import serial

from pdugen.sms.errors import ModemError
from pdugen.sms.pdu import build_pdus

MODEM_DEVICE = os.getenv("MODEM_DEVICE")
MODEM_BAUD = int(os.getenv("MODEM_BAUD", "115200"))
MODEM_TIMEOUT = float(os.getenv("MODEM_TIMEOUT", "5"))


def _await_result(port: serial.Serial) -> str:
    ref = ""
    while True:
        raw = port.readline()
        if not raw:
            raise ModemError("timed out waiting for modem")
        line = raw.decode(errors="ignore").strip()
        if not line:
            continue
        if line.startswith("+CMGS:"):
            ref = line.split(":")[1].strip()
        if line in {"OK", "ERROR"} or line.startswith("+CMS ERROR"):
            if line != "OK":
                raise ModemError(line)
            return ref


def send_sms(
    number: str,
    text: str,
    device: str | None = None,
    baud: int | None = None,
    port: serial.Serial | None = None,
    flash: bool = False,
    report: bool = False,
) -> List[str]:
    """Send an SMS in PDU mode, one AT+CMGS per segment.

    Returns the message references reported by the modem.
    """
    pdus = build_pdus(number, text, flash=flash, report=report)

    close_port = False
    if port is None:
        device = device or MODEM_DEVICE
        if not device:
            raise ValueError("no modem device configured")
        port = serial.Serial(device, baudrate=baud or MODEM_BAUD, timeout=MODEM_TIMEOUT)
        close_port = True
    try:
        refs: list[str] = []
        port.write(b"AT+CMGF=0\r")
        port.readline()
        for seg in pdus:
            pdu = seg["pdu"]
            logging.info(
                "sending PDU %s/%s to %s: %s",
                seg["seg_index"],
                seg["seg_total"],
                number,
                pdu,
            )
            port.write(f"AT+CMGS={seg['tpdu_length']}\r".encode())
            port.readline()
            port.write(pdu.encode() + b"\x1a")
            refs.append(_await_result(port))
        return refs
    finally:
        if close_port:
            port.close()
