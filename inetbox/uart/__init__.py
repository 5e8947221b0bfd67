"""Abstract UART bus, attached devices, write action and traffic debugger."""