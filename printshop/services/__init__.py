"""Services: stores, checkout orchestration, cart and print schedule."""
