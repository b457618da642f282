"""Canonical protocol layer: versions, agent ids, receipts, structured logs and configuration."""