from umshado.commands.vendors.publish_vendor_command import PublishVendorCommand

__all__ = ["PublishVendorCommand"]
