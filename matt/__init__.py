"""
MATT auction clearing

Uniform-price clearing for NFT auctions with off-chain signed bids:
- Signed bid model and EIP-712 typed messages
- Concurrent bid verification against an external verifier
- Revenue-maximizing clearing price and winner selection
"""
