"""Readers for the ACT, SPR, GAT and GND formats and GRF entry decryption."""